"""IRC line tokenizer.

Turns a single protocol line into its syntactic parts. Knows nothing about
Twitch semantics; tag normalization and dispatch happen downstream.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import LineSyntaxError
from .models import Prefix

_TAG_ESCAPES = {":": ";", "s": " ", "\\": "\\", "r": "\r", "n": "\n"}


@dataclass(slots=True)
class ParsedLine:
    command: str
    prefix: Prefix
    params: tuple[str, ...]
    trailing: str | None
    tags: dict[str, str] = field(default_factory=dict)


def parse_line(line: str) -> ParsedLine:
    """Tokenize one line (without its CRLF).

    Raises:
        LineSyntaxError: the line is empty, has a tag or prefix segment with
            nothing after it, or the command is neither a word nor a
            three-digit numeric.
    """
    rest = line.lstrip()
    if not rest:
        raise LineSyntaxError("empty line", line)

    tags: dict[str, str] = {}
    if rest.startswith("@"):
        tags_part, sep, rest = rest.partition(" ")
        if not sep:
            raise LineSyntaxError("tags without command", line)
        tags = _parse_tags(tags_part[1:])
        rest = rest.lstrip(" ")

    prefix = Prefix()
    if rest.startswith(":"):
        prefix_part, sep, rest = rest[1:].partition(" ")
        if not sep or not prefix_part:
            raise LineSyntaxError("prefix without command", line)
        prefix = _parse_prefix(prefix_part)
        rest = rest.lstrip(" ")

    trailing: str | None = None
    if rest.startswith(":"):
        raise LineSyntaxError("missing command", line)
    if " :" in rest:
        rest, trailing = rest.split(" :", 1)

    parts = rest.split()
    if not parts:
        raise LineSyntaxError("missing command", line)
    command = parts[0]
    if not (command.isalpha() or (len(command) == 3 and command.isdigit())):
        raise LineSyntaxError(f"invalid command {command!r}", line)

    return ParsedLine(
        command=command,
        prefix=prefix,
        params=tuple(parts[1:]),
        trailing=trailing,
        tags=tags,
    )


def _parse_prefix(raw: str) -> Prefix:
    # nick!user@host, any of the last two parts may be missing
    name, _, host = raw.partition("@")
    name, _, user = name.partition("!")
    return Prefix(name=name or None, user=user or None, host=host or None)


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = unescape_tag_value(v)
    return tags


def unescape_tag_value(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None:
            break  # a lone trailing backslash is dropped
        out.append(_TAG_ESCAPES.get(nxt, nxt))
    return "".join(out)
