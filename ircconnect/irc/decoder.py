"""Line-based IRC decoder: bytes in, protocol events out.

The decoder is bound to a transport for its outbound commands. It keeps
only framing state (a partial line, MOTD and NAMES accumulators) and answers
server PINGs itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..constants import IRC_ENCODING
from ..errors.internal import ParsingError
from ..logs.logger import logger
from . import events as ev
from .parser import IRCMessage, parse_irc_message
from .protocols import Transport

_MEMBER_MODES = "~&@%+"


def _parse_member(entry: str) -> ev.ChannelMember:
    mode = ""
    name = entry
    while name and name[0] in _MEMBER_MODES:
        mode += name[0]
        name = name[1:]
    return ev.ChannelMember(name=name, mode=mode)


class LineDecoder:
    def __init__(
        self,
        transport: Transport,
        encoding: str = IRC_ENCODING,
        label: str | None = None,
    ):
        self.transport = transport
        self.encoding = encoding
        self.label = label
        self._buffer = b""
        self._motd: list[str] = []
        self._names: dict[str, list[ev.ChannelMember]] = {}
        self._handlers: dict[str, Callable[[IRCMessage], ev.ProtocolEvent | None]] = {
            "001": self._on_welcome,
            "301": self._on_away,
            "332": self._on_topic_reply,
            "353": self._on_names_reply,
            "366": self._on_names_end,
            "375": self._on_motd_start,
            "372": self._on_motd_line,
            "376": self._on_motd_end,
            "422": self._on_no_motd,
            "NOTICE": self._on_notice,
            "PART": self._on_part,
            "QUIT": self._on_quit,
            "MODE": self._on_mode,
            "INVITE": self._on_invite,
            "KICK": self._on_kick,
            "TOPIC": self._on_topic,
            "JOIN": self._on_join,
            "NICK": self._on_nick,
            "PRIVMSG": self._on_privmsg,
            "ERROR": self._on_error,
        }

    # Outbound commands

    def send(self, line: str) -> None:
        self.transport.write(f"{line}\r\n".encode(self.encoding))

    def pass_(self, password: str) -> None:
        self.send(f"PASS {password}")

    def nick(self, name: str) -> None:
        self.send(f"NICK {name}")

    def user(self, name: str, real_name: str) -> None:
        self.send(f"USER {name} 0 * :{real_name}")

    def join(self, channel: str) -> None:
        self.send(f"JOIN {channel}")

    def pong(self, token: str) -> None:
        self.send(f"PONG :{token}")

    # Inbound

    def feed(self, data: bytes) -> list[ev.ProtocolEvent]:
        self._buffer += data
        produced: list[ev.ProtocolEvent] = []
        while b"\n" in self._buffer:
            raw, self._buffer = self._buffer.split(b"\n", 1)
            line = raw.rstrip(b"\r").decode(self.encoding, errors="replace")
            if not line.strip():
                continue
            event = self.decode_line(line)
            if event is not None:
                produced.append(event)
        return produced

    def decode_line(self, line: str) -> ev.ProtocolEvent | None:
        try:
            msg = parse_irc_message(line)
        except ParsingError as e:
            logger.log_event(
                "irc",
                "malformed_line",
                level=logging.WARNING,
                connection=self.label,
                line=line,
                error=str(e),
            )
            return None
        if msg.command == "PING":
            self.pong(msg.trailing)
            logger.log_event("irc", "ping", level=logging.DEBUG, connection=self.label)
            return None
        handler = self._handlers.get(msg.command)
        if handler is not None:
            return handler(msg)
        if msg.command.isdigit() and msg.command[0] in "45":
            return ev.Errors(message=msg.trailing, command=msg.command)
        return None

    def _on_welcome(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Welcome(nick=msg.param(0))

    def _on_away(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Away(nick=msg.param(1), message=msg.param(2))

    def _on_topic_reply(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Topic(channel=msg.param(1), topic=msg.param(2))

    def _on_names_reply(self, msg: IRCMessage) -> None:
        # 353 <me> <symbol> <channel> :<names>
        channel = msg.param(2)
        members = self._names.setdefault(channel, [])
        members.extend(_parse_member(n) for n in msg.param(3).split() if n)
        return None

    def _on_names_end(self, msg: IRCMessage) -> ev.ProtocolEvent:
        channel = msg.param(1)
        members = self._names.pop(channel, [])
        return ev.Names(channel=channel, names=tuple(members))

    def _on_motd_start(self, msg: IRCMessage) -> None:  # noqa: ARG002
        self._motd = []
        return None

    def _on_motd_line(self, msg: IRCMessage) -> None:
        self._motd.append(msg.trailing)
        return None

    def _on_motd_end(self, msg: IRCMessage) -> ev.ProtocolEvent:  # noqa: ARG002
        lines = tuple(self._motd)
        self._motd = []
        return ev.Motd(lines=lines)

    def _on_no_motd(self, msg: IRCMessage) -> ev.ProtocolEvent:  # noqa: ARG002
        return ev.Motd(lines=())

    def _on_notice(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Notice(sender=msg.nick, to=msg.param(0), message=msg.param(1))

    def _on_part(self, msg: IRCMessage) -> ev.ProtocolEvent:
        channels = tuple(c for c in msg.param(0).split(",") if c)
        return ev.Part(nick=msg.nick, message=msg.param(1), channels=channels)

    def _on_quit(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Quit(nick=msg.nick, message=msg.param(0))

    def _on_mode(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Mode(
            nick=msg.nick,
            target=msg.param(0),
            flag=msg.param(1),
            args=tuple(msg.params[2:]),
        )

    def _on_invite(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Invite(sender=msg.nick, to=msg.param(0), channel=msg.param(1))

    def _on_kick(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Kick(
            nick=msg.nick,
            channel=msg.param(0),
            target=msg.param(1),
            message=msg.param(2),
        )

    def _on_topic(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Topic(channel=msg.param(0), topic=msg.param(1), nick=msg.nick)

    def _on_join(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Join(channel=msg.param(0), nick=msg.nick)

    def _on_nick(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Nick(nick=msg.nick, new=msg.param(0))

    def _on_privmsg(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Message(sender=msg.nick, to=msg.param(0), message=msg.param(1))

    def _on_error(self, msg: IRCMessage) -> ev.ProtocolEvent:
        return ev.Errors(message=msg.trailing, command="ERROR")
