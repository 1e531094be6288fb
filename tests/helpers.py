"""Test doubles shared by the connection tests."""

import asyncio

from ircconnect.irc.models import ConnectionIdentity, ConnectionState


class FakeTransport:
    """Transport double: records writes, lets the test emit lifecycle events."""

    def __init__(self) -> None:
        self.opened: tuple[str, int, int] | None = None
        self.emit = None
        self.written: list[bytes] = []
        self.closed = False

    def open(self, host, port, timeout_ms, emit) -> None:  # type: ignore[no-untyped-def]
        self.opened = (host, port, timeout_ms)
        self.emit = emit

    def write(self, data: bytes) -> None:
        self.written.append(data)

    def close(self) -> None:
        self.closed = True

    @property
    def lines(self) -> list[str]:
        return [w.decode("utf-8").rstrip("\r\n") for w in self.written]


class Recorder:
    """Sink, lookup and command layer recording everything in one ordered list."""

    def __init__(self) -> None:
        self.events: list[object] = []
        self.known: dict[ConnectionIdentity, ConnectionState] = {}

    def sink(self, notification) -> None:  # type: ignore[no-untyped-def]
        self.events.append(notification)

    def lookup(self, identity: ConnectionIdentity) -> ConnectionState | None:
        return self.known.get(identity)

    def issue_join(self, connection_id: ConnectionIdentity, channel: str) -> None:
        self.events.append(("join", connection_id, channel))

    @property
    def notifications(self) -> list[object]:
        return [e for e in self.events if not isinstance(e, tuple)]

    @property
    def joins(self) -> list[str]:
        return [e[2] for e in self.events if isinstance(e, tuple)]

    def kinds(self) -> list[str]:
        return [n.kind for n in self.notifications]


async def settle(rounds: int = 10) -> None:
    """Let session tasks drain their queues."""
    for _ in range(rounds):
        await asyncio.sleep(0)


