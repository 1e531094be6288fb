"""Notice routing for servers that put the channel in the message body."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_CHANNEL = re.compile(r"^\[(#\S+)\]")


@dataclass(frozen=True, slots=True)
class RoutedNotice:
    to: str
    message: str


def channel_from_notice(message: str) -> str | None:
    match = _LEADING_CHANNEL.match(message)
    return match.group(1) if match else None


def route_notice(sender: str, to: str, message: str) -> RoutedNotice:  # noqa: ARG001
    """Resolve the effective target of a notice.

    ``"[#chan] text"`` addressed to a user is re-targeted at ``#chan`` with
    the bracket token removed from the body; the remaining words are
    rejoined with single spaces.
    """
    channel = channel_from_notice(message)
    if channel is None:
        return RoutedNotice(to=to, message=message)
    remainder = message.split()[1:]
    return RoutedNotice(to=channel, message=" ".join(remainder))
