"""Protocol definitions for the collaborators of the connection manager.

Transports, decoders and the consumer side are all expressed with
typing.Protocol so tests and applications can plug in their own
implementations without inheriting from anything in this package.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from .events import InboundEvent, ProtocolEvent
    from .models import ConnectionIdentity, ConnectionState
    from .notifications import Notification

EventEmitter = Callable[["InboundEvent"], None]


class Transport(Protocol):
    """Byte-stream connection that reports its lifecycle as events."""

    def open(self, host: str, port: int, timeout_ms: int, emit: EventEmitter) -> None:
        """Start connecting; lifecycle and data events go to ``emit``."""
        ...

    def write(self, data: bytes) -> None:
        """Queue raw bytes for sending."""
        ...

    def close(self) -> None:
        """Abandon the connection."""
        ...


class ProtocolDecoder(Protocol):
    """IRC wire decoder bound to one transport."""

    def feed(self, data: bytes) -> list[ProtocolEvent]:
        """Consume raw bytes and return the complete events they carry."""
        ...

    def pass_(self, password: str) -> None:
        ...

    def nick(self, name: str) -> None:
        ...

    def user(self, name: str, real_name: str) -> None:
        ...

    def join(self, channel: str) -> None:
        ...


class NotificationSink(Protocol):
    """Receives notifications; may return an awaitable."""

    def __call__(self, notification: Notification) -> Awaitable[Any] | None:
        ...


class ConnectionLookup(Protocol):
    """Consumer-side read of the last known state for an identity."""

    def __call__(self, identity: ConnectionIdentity) -> ConnectionState | None:
        ...


class JoinCommandIssuer(Protocol):
    """Consumer command layer used during rejoin replay."""

    def issue_join(
        self, connection_id: ConnectionIdentity, channel: str
    ) -> Awaitable[Any] | None:
        ...


TransportFactory = Callable[[], Transport]
DecoderFactory = Callable[[Transport], ProtocolDecoder]
