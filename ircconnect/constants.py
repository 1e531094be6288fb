"""
Configuration constants for ircconnect

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Connection constants
IRC_CONNECT_TIMEOUT_MS = _get_env_int(
    "IRC_CONNECT_TIMEOUT_MS", 1000
)  # Abandon the connection attempt after this many milliseconds
IRC_DEFAULT_PORT = _get_env_int("IRC_DEFAULT_PORT", 6667)  # Plain-text IRC port
IRC_READ_CHUNK_SIZE = _get_env_int(
    "IRC_READ_CHUNK_SIZE", 4096
)  # Bytes requested per transport read
IRC_ENCODING = _get_env_str("IRC_ENCODING", "utf-8")  # Wire encoding for lines

# Configuration constants
IRC_CONF_FILE = _get_env_str("IRC_CONF_FILE", "ircconnect.conf")  # Server list file

# Protocol constants
CTCP_DELIMITER = "\x01"
CTCP_ACTION_PREFIX = f"{CTCP_DELIMITER}ACTION"
TIMEOUT_ERROR_REASON = "transport timeout"
