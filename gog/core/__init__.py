"""Core types: Result, exit codes, user configuration."""

from .config import AppConfig, ConfigError, load_config, load_or_create_config, save_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "AppConfig",
    "ConfigError",
    "load_config",
    "load_or_create_config",
    "save_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
