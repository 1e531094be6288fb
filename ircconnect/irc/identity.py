"""Deterministic connection identities."""

from __future__ import annotations

import hashlib

from ..config.model import Credentials
from .classifier import fold_name
from .models import ConnectionIdentity

_IDENTITY_LENGTH = 16


def credentials_to_id(credentials: Credentials) -> ConnectionIdentity:
    """Derive the identity for a credential set.

    Only server, port and nickname take part; server and nickname compare
    case-insensitively so that ``IRC.Example.org``/``Bob`` and
    ``irc.example.org``/``bob`` name the same connection.
    """
    key = "\x00".join(
        (
            credentials.server.strip().lower(),
            str(credentials.port),
            fold_name(credentials.nickname),
        )
    )
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return ConnectionIdentity(digest[:_IDENTITY_LENGTH])


def describe(credentials: Credentials) -> str:
    """Human label used as the log prefix for a connection."""
    return f"{credentials.nickname}@{credentials.server}:{credentials.port}"
