"""Centralized internal error hierarchy.

These exceptions never cross the connection manager boundary: transport and
protocol failures are reported to consumers as notifications. They exist so
that the supporting modules (parser, configuration) can signal
failures to their direct callers with a semantic category.

Classes:
  InternalError        - Base for all internal errors.
  ParsingError         - A protocol line that cannot be tokenised.
  ConfigError          - Missing or invalid configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ParsingError(InternalError):
    """Exception raised when an inbound IRC line cannot be parsed.

    The offending line is stored under ``data["line"]``.
    """


class ConfigError(InternalError):
    """Exception raised when no usable configuration can be loaded."""


__all__ = [
    "InternalError",
    "ParsingError",
    "ConfigError",
]
