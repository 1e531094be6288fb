"""In-memory consumer: connection state registry and join command layer.

``ConnectionRegistry`` is the smallest consumer that makes reconnect replay
useful. It is the notification sink, the connection lookup and the join
command issuer for a ``ConnectionManager`` in one object.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import replace

from .irc import notifications as nt
from .irc.classifier import equal_names
from .irc.models import (
    ConnectionIdentity,
    ConnectionState,
    Conversation,
    ConversationType,
)
from .logs.logger import logger


def _upsert(
    conversations: tuple[Conversation, ...] | None, conversation: Conversation
) -> tuple[Conversation, ...]:
    existing = list(conversations or ())
    for i, c in enumerate(existing):
        if equal_names(c.name, conversation.name):
            existing[i] = replace(c, received_join=c.received_join or conversation.received_join)
            return tuple(existing)
    existing.append(conversation)
    return tuple(existing)


class ConnectionRegistry:
    def __init__(self, history_size: int = 500) -> None:
        self.connections: dict[ConnectionIdentity, ConnectionState] = {}
        self.history: deque[nt.Notification] = deque(maxlen=history_size)
        self._reducers: dict[type, Callable[[ConnectionState, nt.Notification], ConnectionState]] = {
            nt.ConnectionClosed: lambda s, n: replace(s, is_connected=False),
            nt.ConnectionError: lambda s, n: replace(s, error=n.error),
            nt.WelcomeReceived: lambda s, n: replace(s, is_welcome=True),
            nt.JoinReceived: self._on_join,
            nt.PartReceived: self._on_part,
            nt.DirectMessageReceived: self._on_direct_message,
        }

    # Sink

    def __call__(self, notification: nt.Notification) -> None:
        self.apply(notification)

    def apply(self, notification: nt.Notification) -> None:
        self.history.append(notification)
        cid = notification.connection_id
        if isinstance(
            notification,
            nt.ConnectionPending | nt.ConnectionSucceeded | nt.ReconnectionRequested,
        ):
            self.connections[cid] = notification.connection
            return
        current = self.connections.get(cid)
        reducer = self._reducers.get(type(notification))
        if reducer is None:
            return
        if current is None:
            logger.log_event(
                "registry",
                "unknown_connection",
                level=logging.DEBUG,
                kind=notification.kind,
                connection_id=cid,
            )
            return
        self.connections[cid] = reducer(current, notification)

    # Lookup

    def lookup(self, identity: ConnectionIdentity) -> ConnectionState | None:
        return self.connections.get(identity)

    # Command layer

    def issue_join(self, connection_id: ConnectionIdentity, channel: str) -> None:
        state = self.connections.get(connection_id)
        if state is None or state.stream is None:
            logger.log_event(
                "registry",
                "join_no_stream",
                level=logging.WARNING,
                name=channel,
                connection_id=connection_id,
            )
            return
        state.stream.join(channel)

    # Reducers

    @staticmethod
    def _is_self(state: ConnectionState, nick: str) -> bool:
        return equal_names(state.credentials.nickname, nick)

    def _on_join(self, state: ConnectionState, n: nt.JoinReceived) -> ConnectionState:
        if not self._is_self(state, n.sender):
            return state
        conversation = Conversation(
            name=n.channel, type=ConversationType.CHANNEL, received_join=True
        )
        return replace(state, conversations=_upsert(state.conversations, conversation))

    def _on_part(self, state: ConnectionState, n: nt.PartReceived) -> ConnectionState:
        if not self._is_self(state, n.nick) or not state.conversations:
            return state
        remaining = tuple(
            c
            for c in state.conversations
            if not any(equal_names(c.name, ch) for ch in n.channels)
        )
        return replace(state, conversations=remaining)

    def _on_direct_message(
        self, state: ConnectionState, n: nt.DirectMessageReceived
    ) -> ConnectionState:
        conversation = Conversation(name=n.sender, type=ConversationType.DIRECT)
        return replace(state, conversations=_upsert(state.conversations, conversation))
