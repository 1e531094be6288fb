"""Inbound events: transport lifecycle plus decoded protocol events.

Every event a session reacts to is one of the types in ``InboundEvent``;
transports and decoders produce them, ``reactor.react`` consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# Transport lifecycle


@dataclass(frozen=True, slots=True)
class TransportConnected:
    pass


@dataclass(frozen=True, slots=True)
class TransportTimeout:
    pass


@dataclass(frozen=True, slots=True)
class TransportError:
    message: str


@dataclass(frozen=True, slots=True)
class TransportEnd:
    pass


@dataclass(frozen=True, slots=True)
class TransportClosed:
    had_error: bool = False


@dataclass(frozen=True, slots=True)
class TransportData:
    data: bytes


TransportEvent = (
    TransportConnected
    | TransportTimeout
    | TransportError
    | TransportEnd
    | TransportClosed
    | TransportData
)


# Protocol events


@dataclass(frozen=True, slots=True)
class Welcome:
    nick: str


@dataclass(frozen=True, slots=True)
class Motd:
    lines: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Notice:
    sender: str
    to: str
    message: str


@dataclass(frozen=True, slots=True)
class Away:
    nick: str
    message: str


@dataclass(frozen=True, slots=True)
class Part:
    nick: str
    message: str
    channels: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Quit:
    nick: str
    message: str


@dataclass(frozen=True, slots=True)
class Mode:
    nick: str
    target: str
    flag: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Invite:
    sender: str
    to: str
    channel: str


@dataclass(frozen=True, slots=True)
class Kick:
    nick: str
    target: str
    channel: str
    message: str


@dataclass(frozen=True, slots=True)
class ChannelMember:
    name: str
    mode: str = ""


@dataclass(frozen=True, slots=True)
class Names:
    channel: str
    names: tuple[ChannelMember, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Topic:
    channel: str
    topic: str
    nick: str | None = None


@dataclass(frozen=True, slots=True)
class Join:
    channel: str
    nick: str


@dataclass(frozen=True, slots=True)
class Nick:
    nick: str
    new: str


@dataclass(frozen=True, slots=True)
class Message:
    sender: str
    to: str
    message: str


@dataclass(frozen=True, slots=True)
class Errors:
    message: str
    command: str | None = None


ProtocolEvent = (
    Welcome
    | Motd
    | Notice
    | Away
    | Part
    | Quit
    | Mode
    | Invite
    | Kick
    | Names
    | Topic
    | Join
    | Nick
    | Message
    | Errors
)

InboundEvent = TransportEvent | ProtocolEvent
