"""Error hierarchy and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import ConfigError, InternalError, ParsingError  # noqa: F401

__all__ = ["InternalError", "ParsingError", "ConfigError", "log_error"]
