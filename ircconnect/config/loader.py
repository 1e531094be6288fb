"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import Credentials


class ConfigLoader:
    """Loads server credential sets from a JSON configuration file.

    Accepted layouts: ``{"servers": [...]}``, a bare list of server objects,
    or a single server object.
    """

    def __init__(self, path: str | os.PathLike[str]):
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = str(path)

    def load_raw(self) -> list[dict[str, Any]]:
        """Return raw server entries, or an empty list when unreadable."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.log_event("config", "file_missing", level=logging.WARNING, path=self.path)
            return []
        except (OSError, ValueError) as e:
            logger.log_event(
                "config", "load_error", level=logging.ERROR, path=self.path, error=str(e)
            )
            return []
        if isinstance(data, dict) and "servers" in data:
            servers = data["servers"]
            if not isinstance(servers, list):
                return []
            return [s for s in servers if isinstance(s, dict)]
        if isinstance(data, list):
            return [s for s in data if isinstance(s, dict)]
        if isinstance(data, dict) and "server" in data:
            return [data]
        return []

    def load_credentials(self) -> list[Credentials]:
        """Load and validate every server entry.

        Invalid entries are logged and skipped.

        Raises:
            ConfigError: If no valid entry remains.
        """
        valid: list[Credentials] = []
        for index, entry in enumerate(self.load_raw()):
            try:
                valid.append(Credentials.from_dict(entry))
            except ValidationError as e:
                logger.log_event(
                    "config",
                    "invalid_entry",
                    level=logging.WARNING,
                    index=index,
                    error=str(e.errors()[0]["msg"]) if e.errors() else str(e),
                )
        if not valid:
            raise ConfigError(
                f"No valid server configuration found in {self.path}",
                data={"path": self.path},
            )
        logger.log_event("app", "config_loaded", count=len(valid), path=self.path)
        return valid
