"""Chat message classification: actions, direct messages, channel messages."""

from __future__ import annotations

import re
import string

from ..constants import CTCP_ACTION_PREFIX
from .models import ConnectionIdentity
from .notifications import (
    ActionReceived,
    ChannelMessageReceived,
    ChatNotification,
    DirectMessageReceived,
)

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ACTION_HEAD = re.compile(r"^\x01ACTION ")
_ACTION_TAIL = re.compile(r"\x01$")


def fold_name(name: str) -> str:
    """ASCII-only lower-casing; other characters are left untouched."""
    return name.translate(_ASCII_FOLD)


def equal_names(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return fold_name(a) == fold_name(b)


def is_action(message: str) -> bool:
    return message.strip().startswith(CTCP_ACTION_PREFIX)


def action_text(sender: str, message: str) -> str:
    """Render a CTCP ACTION body as ``"<sender> <text>"``."""
    body = _ACTION_HEAD.sub("", message)
    body = _ACTION_TAIL.sub("", body)
    return f"{sender} {body}"


def classify_message(
    connection_id: ConnectionIdentity,
    sender: str,
    to: str,
    message: str,
    self_nickname: str,
) -> ChatNotification:
    """Decide what an inbound PRIVMSG means for the consumer.

    First match wins: a CTCP ACTION, then a message addressed to our own
    nickname, then a channel message. An action sent straight to us is
    filed under the sender's name so it lands in the same pane as their
    direct messages.
    """
    to_self = equal_names(to, self_nickname)
    if is_action(message):
        return ActionReceived(
            connection_id=connection_id,
            channel=sender if to_self else to,
            sender=sender,
            message=action_text(sender, message),
        )
    if to_self:
        return DirectMessageReceived(
            connection_id=connection_id, sender=sender, message=message
        )
    return ChannelMessageReceived(
        connection_id=connection_id, channel=to, sender=sender, message=message
    )
