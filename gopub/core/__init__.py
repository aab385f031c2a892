"""Core domain types and logic."""

from .config import ConfigError, FileConfig, ReleaseConfig, load_config, resolve_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "FileConfig",
    "ReleaseConfig",
    "load_config",
    "resolve_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
