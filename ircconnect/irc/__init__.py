"""IRC subsystem package.

Contains the connection manager and its pure reaction step, the notice
router and message classifier, plus the default asyncio transport and
line decoder.
"""

from .classifier import classify_message, equal_names  # noqa: F401
from .decoder import LineDecoder  # noqa: F401
from .identity import credentials_to_id  # noqa: F401
from .manager import ConnectionManager, ConnectionSession  # noqa: F401
from .models import (  # noqa: F401
    ConnectionIdentity,
    ConnectionState,
    Conversation,
    ConversationType,
    LinkState,
    SessionMode,
)
from .notice import RoutedNotice, route_notice  # noqa: F401
from .parser import IRCMessage, parse_irc_message  # noqa: F401
from .reactor import Reaction, SessionState, react  # noqa: F401
from .transport import StreamTransport  # noqa: F401

__all__ = [
    "ConnectionIdentity",
    "ConnectionManager",
    "ConnectionSession",
    "ConnectionState",
    "Conversation",
    "ConversationType",
    "IRCMessage",
    "LineDecoder",
    "LinkState",
    "Reaction",
    "RoutedNotice",
    "SessionMode",
    "SessionState",
    "StreamTransport",
    "classify_message",
    "credentials_to_id",
    "equal_names",
    "parse_irc_message",
    "react",
    "route_notice",
]
