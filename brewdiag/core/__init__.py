"""Core types shared by every layer: exit codes, results, configuration."""

from .config import DoctorConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    "DoctorConfig",
    "load_config",
    "load_config_or_default",
    "ErrorCode",
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
