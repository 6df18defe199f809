"""Platform layer: subprocess execution, file writes, user directories."""

from .files import atomic_write_text, read_text_if_exists, remove_tree
from .paths import user_config_dir
from .process import NOT_STARTED, ProcessError, run

__all__ = [
    "NOT_STARTED",
    "ProcessError",
    "atomic_write_text",
    "read_text_if_exists",
    "remove_tree",
    "run",
    "user_config_dir",
]
