"""IRC message parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors.internal import ParsingError


@dataclass
class IRCMessage:
    raw: str
    prefix: str | None
    command: str
    params: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def nick(self) -> str:
        return nick_from_prefix(self.prefix)

    @property
    def trailing(self) -> str:
        return self.params[-1] if self.params else ""

    def param(self, index: int, default: str = "") -> str:
        return self.params[index] if len(self.params) > index else default


def parse_irc_message(raw_line: str) -> IRCMessage:
    """Split one IRC line into tags, prefix, command and parameters.

    Raises:
        ParsingError: If the line carries no command.
    """
    tags: dict[str, str] = {}
    prefix: str | None = None
    line = raw_line.rstrip("\r\n")

    if line.startswith("@"):
        if " " not in line:
            raise ParsingError("tags without command", data={"line": raw_line})
        tags_part, line = line.split(" ", 1)
        tags = _parse_tags(tags_part[1:])
        line = line.lstrip(" ")

    if line.startswith(":"):
        remainder = line[1:]
        if " " not in remainder:
            raise ParsingError("prefix without command", data={"line": raw_line})
        prefix, line = remainder.split(" ", 1)
        line = line.lstrip(" ")

    trailing: str | None = None
    if line.startswith(":"):
        line, trailing = "", line[1:]
    elif " :" in line:
        line, trailing = line.split(" :", 1)

    parts = line.split()
    if not parts:
        raise ParsingError("missing command", data={"line": raw_line})
    command = parts[0].upper()
    params = parts[1:]
    if trailing is not None:
        params.append(trailing)

    return IRCMessage(
        raw=raw_line, prefix=prefix, command=command, params=params, tags=tags
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        if "=" in tag:
            k, v = tag.split("=", 1)
        else:
            k, v = tag, ""
        tags[k] = v
    return tags


def nick_from_prefix(prefix: str | None) -> str:
    """``nick!user@host`` -> ``nick``; server prefixes are returned as-is."""
    if not prefix:
        return ""
    return prefix.split("!", 1)[0].split("@", 1)[0]
