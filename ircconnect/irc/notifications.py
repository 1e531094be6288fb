"""Notifications emitted to the consumer.

One frozen dataclass per observable change. ``kind`` is a stable string tag
consumers can switch on without importing the classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..config.model import Credentials
from .events import ChannelMember
from .models import ConnectionIdentity, ConnectionState


@dataclass(frozen=True, slots=True)
class Notification:
    kind: ClassVar[str] = "NOTIFICATION"

    connection_id: ConnectionIdentity


@dataclass(frozen=True, slots=True)
class ConnectionPending(Notification):
    kind: ClassVar[str] = "REQUEST_CONNECTION_PENDING"

    connection: ConnectionState


@dataclass(frozen=True, slots=True)
class ConnectionSucceeded(Notification):
    kind: ClassVar[str] = "REQUEST_CONNECTION_SUCCESS"

    connection: ConnectionState


@dataclass(frozen=True, slots=True)
class CredentialsVerified(Notification):
    kind: ClassVar[str] = "WORKING_CREDENTIALS"

    credentials: Credentials


@dataclass(frozen=True, slots=True)
class ReconnectionRequested(Notification):
    kind: ClassVar[str] = "REQUEST_RECONNECTION"

    connection: ConnectionState


@dataclass(frozen=True, slots=True)
class ConnectionClosed(Notification):
    kind: ClassVar[str] = "CONNECTION_CLOSED"


@dataclass(frozen=True, slots=True)
class ConnectionError(Notification):  # noqa: A001
    kind: ClassVar[str] = "REQUEST_CONNECTION_ERROR"

    error: str


@dataclass(frozen=True, slots=True)
class ProtocolError(Notification):
    kind: ClassVar[str] = "IRC_ERROR"

    message: str


@dataclass(frozen=True, slots=True)
class NoticeReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_NOTICE"

    sender: str
    to: str
    message: str


@dataclass(frozen=True, slots=True)
class AwayReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_AWAY"

    nick: str
    message: str


@dataclass(frozen=True, slots=True)
class PartReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_PART"

    nick: str
    message: str
    channels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class QuitReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_QUIT"

    nick: str
    message: str


@dataclass(frozen=True, slots=True)
class MotdReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_MOTD"

    text: str


@dataclass(frozen=True, slots=True)
class WelcomeReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_WELCOME"

    nick: str


@dataclass(frozen=True, slots=True)
class NickChanged(Notification):
    kind: ClassVar[str] = "RECEIVE_NICK"

    old: str
    new: str


@dataclass(frozen=True, slots=True)
class TopicReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_TOPIC"

    channel: str
    topic: str


@dataclass(frozen=True, slots=True)
class JoinReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_JOIN"

    channel: str
    sender: str


@dataclass(frozen=True, slots=True)
class NamesReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_NAMES"

    channel: str
    names: tuple[ChannelMember, ...]


@dataclass(frozen=True, slots=True)
class ActionReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_ACTION"

    channel: str
    sender: str
    message: str


@dataclass(frozen=True, slots=True)
class DirectMessageReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_DIRECT_MESSAGE"

    sender: str
    message: str


@dataclass(frozen=True, slots=True)
class ChannelMessageReceived(Notification):
    kind: ClassVar[str] = "RECEIVE_CHANNEL_MESSAGE"

    channel: str
    sender: str
    message: str


ChatNotification = ActionReceived | DirectMessageReceived | ChannelMessageReceived
