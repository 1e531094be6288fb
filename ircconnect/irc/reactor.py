"""Pure reaction step of a connection session.

``react`` maps the current session state and one inbound event to the next
state, the notifications to emit (in order) and the channels to rejoin
(issued after the notifications). It performs no I/O; the session applies
the result.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from ..config.model import Credentials
from ..constants import TIMEOUT_ERROR_REASON
from . import events as ev
from . import notifications as nt
from .classifier import classify_message
from .models import ConnectionIdentity, ConnectionState, LinkState, SessionMode
from .notice import route_notice


@dataclass(frozen=True, slots=True)
class SessionState:
    identity: ConnectionIdentity
    credentials: Credentials
    mode: SessionMode
    snapshot: ConnectionState
    phase: LinkState = LinkState.CONNECTING


@dataclass(frozen=True, slots=True)
class Reaction:
    state: SessionState
    notifications: tuple[nt.Notification, ...] = ()
    joins: tuple[str, ...] = ()
    abandon: bool = False


def react(
    state: SessionState,
    event: ev.InboundEvent,
    prior: ConnectionState | None = None,
) -> Reaction:
    """Reduce one event.

    ``prior`` is the consumer's state for this identity, read when the
    transport connects during a reconnect; it is ignored otherwise.
    """
    if state.phase.is_terminal:
        return Reaction(state)
    if isinstance(event, ev.TransportConnected):
        return _on_connected(state, prior)
    if isinstance(event, ev.TransportTimeout):
        return _on_timeout(state)
    if isinstance(event, ev.TransportError):
        return Reaction(
            state, (nt.ConnectionError(connection_id=state.identity, error=event.message),)
        )
    if isinstance(event, ev.TransportClosed):
        return Reaction(
            replace(state, phase=LinkState.CLOSED),
            (nt.ConnectionClosed(connection_id=state.identity),),
        )
    translate = _TRANSLATORS.get(type(event))
    if translate is None:
        # TransportEnd, TransportData, Mode, Invite, Kick
        return Reaction(state)
    return Reaction(state, (translate(state, event),))


def _on_connected(state: SessionState, prior: ConnectionState | None) -> Reaction:
    connected = replace(state, phase=LinkState.CONNECTED)
    if state.mode is SessionMode.CONNECT:
        snapshot = replace(state.snapshot, is_connected=True)
        return Reaction(
            connected,
            (
                nt.ConnectionSucceeded(connection_id=state.identity, connection=snapshot),
                nt.CredentialsVerified(
                    connection_id=state.identity, credentials=state.credentials
                ),
            ),
        )

    if prior is None:
        snapshot = replace(state.snapshot, is_connected=True)
        return Reaction(
            connected,
            (nt.ConnectionSucceeded(connection_id=state.identity, connection=snapshot),),
        )
    snapshot = replace(
        prior.with_conversations_reset(),
        is_connected=True,
        error=None,
        stream=state.snapshot.stream,
    )
    return Reaction(
        connected,
        (nt.ConnectionSucceeded(connection_id=state.identity, connection=snapshot),),
        joins=tuple(snapshot.channel_names()),
    )


def _on_timeout(state: SessionState) -> Reaction:
    error = nt.ConnectionError(connection_id=state.identity, error=TIMEOUT_ERROR_REASON)
    if state.phase is LinkState.CONNECTING:
        return Reaction(replace(state, phase=LinkState.TIMED_OUT), (error,), abandon=True)
    return Reaction(state, (error,))


def _notice(state: SessionState, e: ev.Notice) -> nt.Notification:
    routed = route_notice(e.sender, e.to, e.message)
    return nt.NoticeReceived(
        connection_id=state.identity, sender=e.sender, to=routed.to, message=routed.message
    )


def _message(state: SessionState, e: ev.Message) -> nt.Notification:
    return classify_message(
        state.identity, e.sender, e.to, e.message, state.credentials.nickname
    )


_TRANSLATORS: dict[type, Callable[[SessionState, object], nt.Notification]] = {
    ev.Errors: lambda s, e: nt.ProtocolError(connection_id=s.identity, message=e.message),
    ev.Notice: _notice,
    ev.Away: lambda s, e: nt.AwayReceived(
        connection_id=s.identity, nick=e.nick, message=e.message
    ),
    ev.Part: lambda s, e: nt.PartReceived(
        connection_id=s.identity, nick=e.nick, message=e.message, channels=e.channels
    ),
    ev.Quit: lambda s, e: nt.QuitReceived(
        connection_id=s.identity, nick=e.nick, message=e.message
    ),
    ev.Motd: lambda s, e: nt.MotdReceived(
        connection_id=s.identity, text="\n".join(e.lines)
    ),
    ev.Welcome: lambda s, e: nt.WelcomeReceived(connection_id=s.identity, nick=e.nick),
    ev.Nick: lambda s, e: nt.NickChanged(connection_id=s.identity, old=e.nick, new=e.new),
    ev.Topic: lambda s, e: nt.TopicReceived(
        connection_id=s.identity, channel=e.channel, topic=e.topic
    ),
    ev.Join: lambda s, e: nt.JoinReceived(
        connection_id=s.identity, channel=e.channel, sender=e.nick
    ),
    ev.Names: lambda s, e: nt.NamesReceived(
        connection_id=s.identity, channel=e.channel, names=e.names
    ),
    ev.Message: _message,
}
