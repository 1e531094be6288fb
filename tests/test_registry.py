"""
Tests for the in-memory connection registry
"""

from unittest.mock import MagicMock

import pytest

from ircconnect.config.model import Credentials
from ircconnect.irc import notifications as nt
from ircconnect.irc.identity import credentials_to_id
from ircconnect.irc.models import ConnectionState, Conversation, ConversationType
from ircconnect.registry import ConnectionRegistry


@pytest.fixture
def creds() -> Credentials:
    return Credentials(real_name="R", nickname="MyNick", server="irc.example.org")


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


def _seed(registry: ConnectionRegistry, creds: Credentials, stream=None) -> ConnectionState:  # type: ignore[no-untyped-def]
    state = ConnectionState(id=credentials_to_id(creds), credentials=creds, stream=stream)
    registry(nt.ConnectionPending(connection_id=state.id, connection=state))
    return state


class TestLifecycle:
    def test_pending_stores_connection(self, registry, creds):
        state = _seed(registry, creds)
        assert registry.lookup(state.id) == state

    def test_success_replaces_connection(self, registry, creds):
        state = _seed(registry, creds)
        connected = ConnectionState(id=state.id, credentials=creds, is_connected=True)
        registry(nt.ConnectionSucceeded(connection_id=state.id, connection=connected))
        assert registry.lookup(state.id).is_connected is True

    def test_closed_marks_disconnected(self, registry, creds):
        state = _seed(registry, creds)
        registry(
            nt.ConnectionSucceeded(
                connection_id=state.id,
                connection=ConnectionState(id=state.id, credentials=creds, is_connected=True),
            )
        )
        registry(nt.ConnectionClosed(connection_id=state.id))
        assert registry.lookup(state.id).is_connected is False

    def test_error_is_recorded(self, registry, creds):
        state = _seed(registry, creds)
        registry(nt.ConnectionError(connection_id=state.id, error="transport timeout"))
        assert registry.lookup(state.id).error == "transport timeout"

    def test_welcome_sets_flag(self, registry, creds):
        state = _seed(registry, creds)
        registry(nt.WelcomeReceived(connection_id=state.id, nick="MyNick"))
        assert registry.lookup(state.id).is_welcome is True

    def test_unknown_connection_is_ignored(self, registry):
        registry(nt.ConnectionClosed(connection_id="nope"))  # type: ignore[arg-type]
        assert registry.connections == {}
        assert len(registry.history) == 1

    def test_history_is_bounded(self, creds):
        registry = ConnectionRegistry(history_size=2)
        state = _seed(registry, creds)
        for _ in range(5):
            registry(nt.MotdReceived(connection_id=state.id, text=""))
        assert len(registry.history) == 2


class TestConversations:
    def test_own_join_adds_channel(self, registry, creds):
        state = _seed(registry, creds)
        registry(nt.JoinReceived(connection_id=state.id, channel="#a", sender="mynick"))
        assert registry.lookup(state.id).conversations == (
            Conversation("#a", ConversationType.CHANNEL, True),
        )

    def test_other_join_is_ignored(self, registry, creds):
        state = _seed(registry, creds)
        registry(nt.JoinReceived(connection_id=state.id, channel="#a", sender="bob"))
        assert registry.lookup(state.id).conversations is None

    def test_rejoin_after_reset_marks_joined(self, registry, creds):
        state = _seed(registry, creds)
        registry(
            nt.ConnectionSucceeded(
                connection_id=state.id,
                connection=ConnectionState(
                    id=state.id,
                    credentials=creds,
                    conversations=(Conversation("#a", ConversationType.CHANNEL, False),),
                ),
            )
        )
        registry(nt.JoinReceived(connection_id=state.id, channel="#A", sender="MYNICK"))
        (conversation,) = registry.lookup(state.id).conversations
        assert conversation.name == "#a"
        assert conversation.received_join is True

    def test_own_part_removes_channels(self, registry, creds):
        state = _seed(registry, creds)
        for channel in ("#a", "#b", "#c"):
            registry(nt.JoinReceived(connection_id=state.id, channel=channel, sender="MyNick"))
        registry(
            nt.PartReceived(
                connection_id=state.id, nick="MyNick", message="bye", channels=("#a", "#c")
            )
        )
        names = [c.name for c in registry.lookup(state.id).conversations]
        assert names == ["#b"]

    def test_direct_message_opens_conversation_once(self, registry, creds):
        state = _seed(registry, creds)
        for text in ("hi", "again"):
            registry(
                nt.DirectMessageReceived(connection_id=state.id, sender="bob", message=text)
            )
        assert registry.lookup(state.id).conversations == (
            Conversation("bob", ConversationType.DIRECT, False),
        )


class TestJoinCommands:
    def test_issue_join_uses_stream(self, registry, creds):
        stream = MagicMock()
        state = _seed(registry, creds, stream=stream)
        registry.issue_join(state.id, "#a")
        stream.join.assert_called_once_with("#a")

    def test_issue_join_without_stream_is_dropped(self, registry, creds):
        state = _seed(registry, creds)
        registry.issue_join(state.id, "#a")
        registry.issue_join("unknown", "#a")  # type: ignore[arg-type]


def test_reconnection_request_stores_connection(registry, creds):
    state = ConnectionState(id=credentials_to_id(creds), credentials=creds, is_connected=True)
    registry(nt.ReconnectionRequested(connection_id=state.id, connection=state))
    assert registry.lookup(state.id) == state
