"""Feature lifecycle: the persisted record and the start/push/finish workflow."""

from .model import Feature, FeatureState, FeatureStore, new_feature, validate_feature_id
from .simple_push import next_build_number, simple_push
from .workflow import FeatureWorkflow, FinishOptions, Release, parse_bump_level

__all__ = [
    "Feature",
    "FeatureState",
    "FeatureStore",
    "FeatureWorkflow",
    "FinishOptions",
    "Release",
    "new_feature",
    "next_build_number",
    "parse_bump_level",
    "simple_push",
    "validate_feature_id",
]
