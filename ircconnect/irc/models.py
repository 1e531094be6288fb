"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import TYPE_CHECKING, NewType

from ..config.model import Credentials

if TYPE_CHECKING:  # pragma: no cover
    from .protocols import ProtocolDecoder

ConnectionIdentity = NewType("ConnectionIdentity", str)


class ConversationType(Enum):
    CHANNEL = "CHANNEL"
    DIRECT = "DIRECT"


class SessionMode(Enum):
    CONNECT = auto()
    RECONNECT = auto()


class LinkState(Enum):
    CONNECTING = auto()
    CONNECTED = auto()
    CLOSED = auto()
    TIMED_OUT = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (LinkState.CLOSED, LinkState.TIMED_OUT)


@dataclass(frozen=True, slots=True)
class Conversation:
    name: str
    type: ConversationType
    received_join: bool = False

    def with_received_join(self, received_join: bool) -> Conversation:
        return replace(self, received_join=received_join)


@dataclass(frozen=True, slots=True)
class ConnectionState:
    """Consumer-side snapshot of one connection.

    The connection manager never keeps one of these; it builds them for
    notifications and reads them back through the consumer's lookup.
    """

    id: ConnectionIdentity
    credentials: Credentials
    is_connected: bool = False
    is_welcome: bool = False
    conversations: tuple[Conversation, ...] | None = None
    error: str | None = None
    stream: ProtocolDecoder | None = field(default=None, compare=False, repr=False)

    def with_conversations_reset(self) -> ConnectionState:
        """Mark every conversation as not joined (membership is re-established)."""
        if self.conversations is None:
            return self
        return replace(
            self,
            conversations=tuple(c.with_received_join(False) for c in self.conversations),
        )

    def channel_names(self) -> list[str]:
        if not self.conversations:
            return []
        return [c.name for c in self.conversations if c.type is ConversationType.CHANNEL]
