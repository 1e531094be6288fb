"""Per-server IRC connection manager."""

__version__ = "0.1.0"
