"""Configuration package: credential model and file loader."""

from .loader import ConfigLoader  # noqa: F401
from .model import Credentials  # noqa: F401

__all__ = ["Credentials", "ConfigLoader"]
