"""Connection manager: one session per connect/reconnect call."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import replace

from ..config.model import Credentials
from ..constants import IRC_CONNECT_TIMEOUT_MS
from ..logging_config import error_aggregator
from ..logs.logger import logger
from . import events as ev
from . import notifications as nt
from .decoder import LineDecoder
from .identity import credentials_to_id, describe
from .models import ConnectionIdentity, ConnectionState, LinkState, SessionMode
from .protocols import (
    ConnectionLookup,
    DecoderFactory,
    JoinCommandIssuer,
    NotificationSink,
    ProtocolDecoder,
    Transport,
    TransportFactory,
)
from .reactor import SessionState, react
from .transport import StreamTransport


class ConnectionSession:
    """Owns one transport/decoder pair and drains its event queue in order."""

    def __init__(
        self,
        manager: ConnectionManager,
        credentials: Credentials,
        mode: SessionMode,
    ) -> None:
        self.manager = manager
        self.credentials = credentials
        self.identity = credentials_to_id(credentials)
        self.label = describe(credentials)
        self.queue: asyncio.Queue[ev.InboundEvent] = asyncio.Queue()
        self.transport: Transport = manager.transport_factory()
        self.decoder: ProtocolDecoder = manager.decoder_factory(self.transport)
        snapshot = ConnectionState(
            id=self.identity, credentials=credentials, stream=self.decoder
        )
        self.state = SessionState(
            identity=self.identity,
            credentials=credentials,
            mode=mode,
            snapshot=snapshot,
        )
        self.task: asyncio.Task[None] | None = None

    @property
    def snapshot(self) -> ConnectionState:
        return self.state.snapshot

    def open(self) -> None:
        c = self.credentials
        self.transport.open(c.server, c.port, self.manager.timeout_ms, self.queue.put_nowait)

    async def run(self) -> None:
        try:
            while not self.state.phase.is_terminal:
                event = await self.queue.get()
                if isinstance(event, ev.TransportData):
                    for protocol_event in await self._decode(event.data):
                        await self.handle(protocol_event)
                else:
                    await self.handle(event)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "session_error",
                level=logging.ERROR,
                exc_info=True,
                connection=self.label,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error(
                "internal", f"session failed: {e}", {"connection": self.label}
            )
            if not self.state.phase.is_terminal:
                self.state = replace(self.state, phase=LinkState.CLOSED)
                await self.manager.deliver(
                    nt.ConnectionClosed(connection_id=self.identity), self.label
                )
        finally:
            self.transport.close()
            logger.log_event(
                "connection",
                "session_end",
                level=logging.DEBUG,
                connection=self.label,
                phase=self.state.phase.name,
            )

    async def _decode(self, data: bytes) -> list[ev.ProtocolEvent]:
        try:
            return self.decoder.feed(data)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "decode_error",
                level=logging.ERROR,
                connection=self.label,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error(
                "parsing", f"decoder failed: {e}", {"connection": self.label}
            )
            await self.manager.deliver(
                nt.ProtocolError(connection_id=self.identity, message=str(e)), self.label
            )
            return []

    async def handle(self, event: ev.InboundEvent) -> None:
        if self.state.phase.is_terminal:
            return
        prior: ConnectionState | None = None
        if isinstance(event, ev.TransportConnected):
            self._register()
            if self.state.mode is SessionMode.RECONNECT:
                prior = self.manager.lookup_state(self.identity)
        self._log_inbound(event)
        reaction = react(self.state, event, prior)
        self.state = reaction.state
        for notification in reaction.notifications:
            await self.manager.deliver(notification, self.label)
        for name in reaction.joins:
            logger.log_event(
                "connection", "replay_join", connection=self.label, name=name
            )
            await self.manager.issue_join(self.identity, name, self.label)
        if reaction.abandon:
            self.transport.close()

    def _register(self) -> None:
        c = self.credentials
        try:
            if c.password:
                self.decoder.pass_(c.password)
            self.decoder.nick(c.nickname)
            self.decoder.user(c.nickname, c.real_name)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "handshake_error",
                level=logging.ERROR,
                connection=self.label,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error(
                "network", f"handshake failed: {e}", {"connection": self.label}
            )
            return
        logger.log_event(
            "connection", "handshake_sent", level=logging.DEBUG, connection=self.label
        )

    def _log_inbound(self, event: ev.InboundEvent) -> None:
        if isinstance(event, ev.TransportConnected):
            logger.log_event("connection", "succeeded", connection=self.label)
        elif isinstance(event, ev.TransportTimeout):
            logger.log_event(
                "connection",
                "timeout" if self.state.phase is LinkState.CONNECTING else "idle_timeout",
                level=logging.WARNING,
                connection=self.label,
                timeout_ms=self.manager.timeout_ms,
            )
            error_aggregator.record_error(
                "network", "transport timeout", {"connection": self.label}
            )
        elif isinstance(event, ev.TransportError):
            logger.log_event(
                "connection",
                "error",
                level=logging.ERROR,
                connection=self.label,
                error=event.message,
            )
            error_aggregator.record_error(
                "network", event.message, {"connection": self.label}
            )
        elif isinstance(event, ev.TransportEnd):
            logger.log_event("connection", "end", level=logging.DEBUG, connection=self.label)
        elif isinstance(event, ev.TransportClosed):
            logger.log_event(
                "connection",
                "closed",
                level=logging.WARNING,
                connection=self.label,
                had_error=event.had_error,
            )
        elif isinstance(event, ev.Mode):
            logger.log_event(
                "irc",
                "mode",
                level=logging.DEBUG,
                connection=self.label,
                nick=event.nick,
                target=event.target,
                flag=event.flag,
                args=" ".join(event.args),
            )
        elif isinstance(event, ev.Invite):
            logger.log_event(
                "irc",
                "invite",
                level=logging.DEBUG,
                connection=self.label,
                sender=event.sender,
                to=event.to,
                name=event.channel,
            )
        elif isinstance(event, ev.Kick):
            logger.log_event(
                "irc",
                "kick",
                level=logging.DEBUG,
                connection=self.label,
                nick=event.nick,
                target=event.target,
                name=event.channel,
                message=event.message,
            )


class ConnectionManager:
    """Opens IRC connections and turns their events into notifications.

    The manager keeps no connection state between calls: everything the
    consumer needs is in the notifications, and the only thing read back is
    the consumer's own state through ``lookup`` when a reconnect completes.

    Args:
        sink: Receives every notification, in order. May be async.
        commands: Command layer used to rejoin channels after a reconnect.
        lookup: Returns the consumer's state for an identity, or None.
        transport_factory: Builds a fresh transport per call.
        decoder_factory: Builds the decoder bound to that transport.
        timeout_ms: Connection attempt timeout.
    """

    def __init__(
        self,
        sink: NotificationSink,
        commands: JoinCommandIssuer,
        lookup: ConnectionLookup,
        *,
        transport_factory: TransportFactory = StreamTransport,
        decoder_factory: DecoderFactory = LineDecoder,
        timeout_ms: int = IRC_CONNECT_TIMEOUT_MS,
    ) -> None:
        self.sink = sink
        self.commands = commands
        self.lookup = lookup
        self.transport_factory = transport_factory
        self.decoder_factory = decoder_factory
        self.timeout_ms = timeout_ms
        self._sessions: set[ConnectionSession] = set()

    async def connect(
        self, credentials: Credentials
    ) -> tuple[ConnectionIdentity, nt.ConnectionPending]:
        session = ConnectionSession(self, credentials, SessionMode.CONNECT)
        logger.log_event(
            "connection",
            "connect_start",
            connection=session.label,
            server=credentials.server,
            port=credentials.port,
            nickname=credentials.nickname,
        )
        session.open()
        pending = nt.ConnectionPending(
            connection_id=session.identity, connection=session.snapshot
        )
        await self.deliver(pending, session.label)
        self._start(session)
        return session.identity, pending

    async def reconnect(self, credentials: Credentials) -> nt.ReconnectionRequested | None:
        session = ConnectionSession(self, credentials, SessionMode.RECONNECT)
        logger.log_event(
            "connection",
            "reconnect_start",
            connection=session.label,
            server=credentials.server,
            port=credentials.port,
            nickname=credentials.nickname,
        )
        session.open()
        requested: nt.ReconnectionRequested | None = None
        known = self.lookup_state(session.identity)
        if known is not None:
            requested = nt.ReconnectionRequested(
                connection_id=session.identity, connection=known
            )
            await self.deliver(requested, session.label)
        self._start(session)
        return requested

    def _start(self, session: ConnectionSession) -> None:
        session.task = asyncio.get_running_loop().create_task(session.run())
        self._sessions.add(session)
        session.task.add_done_callback(lambda _t: self._sessions.discard(session))

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)

    async def shutdown(self) -> None:
        """Abandon every running session (process teardown)."""
        sessions = list(self._sessions)
        for session in sessions:
            session.transport.close()
            if session.task is not None:
                session.task.cancel()
        await asyncio.gather(
            *(s.task for s in sessions if s.task is not None), return_exceptions=True
        )
        self._sessions.clear()

    def lookup_state(self, identity: ConnectionIdentity) -> ConnectionState | None:
        try:
            return self.lookup(identity)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "lookup_error",
                level=logging.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error("internal", f"lookup failed: {e}")
            return None

    async def deliver(self, notification: nt.Notification, label: str | None = None) -> None:
        logger.log_event(
            "irc", "notification", level=logging.DEBUG, connection=label, kind=notification.kind
        )
        try:
            result = self.sink(notification)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "sink_error",
                level=logging.ERROR,
                connection=label,
                kind=notification.kind,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error(
                "internal", f"sink failed on {notification.kind}: {e}", {"connection": label}
            )

    async def issue_join(
        self, identity: ConnectionIdentity, name: str, label: str | None = None
    ) -> None:
        try:
            result = self.commands.issue_join(identity, name)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "connection",
                "join_error",
                level=logging.ERROR,
                connection=label,
                name=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            error_aggregator.record_error(
                "internal", f"join {name} failed: {e}", {"connection": label}
            )
