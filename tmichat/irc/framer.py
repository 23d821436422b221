"""Chunk framing: transport text -> ProtocolMessage records."""

from __future__ import annotations

import logging

from ..constants import LINE_DELIMITER, MAX_LINE_LENGTH
from ..errors import LineSyntaxError
from ..logs.logger import logger
from .models import ProtocolMessage
from .parser import parse_line
from .tags import normalize_tags


def frame_line(line: str) -> ProtocolMessage:
    """Build a normalized ProtocolMessage from one line.

    Raises:
        LineSyntaxError: propagated from the line parser.
    """
    parsed = parse_line(line)
    return ProtocolMessage(
        command=parsed.command,
        tags=dict(normalize_tags(parsed.tags)),
        params=parsed.params,
        tail=parsed.trailing,
        prefix=parsed.prefix,
        raw=line,
    )


class MessageFramer:
    """Splits transport chunks on CRLF, buffering an incomplete last line.

    A buffered line longer than ``max_line_length`` is dropped, along with the
    rest of it up to the next CRLF.
    """

    def __init__(
        self, user: str | None = None, max_line_length: int = MAX_LINE_LENGTH
    ) -> None:
        self.user = user
        self.max_line_length = max_line_length
        self.buffer = ""
        self.discarding = False

    def feed(self, chunk: str) -> list[ProtocolMessage]:
        if self.discarding:
            _, sep, chunk = chunk.partition(LINE_DELIMITER)
            if not sep:
                return []
            self.discarding = False
        self.buffer += chunk
        *lines, self.buffer = self.buffer.split(LINE_DELIMITER)
        messages = self._frame_lines(lines)
        if len(self.buffer) > self.max_line_length:
            self._log_error(
                f"line exceeds {self.max_line_length} characters",
                self.buffer[:80],
            )
            self.buffer = ""
            self.discarding = True
        return messages

    def flush(self) -> list[ProtocolMessage]:
        """Frame whatever is left in the buffer (e.g. on transport close)."""
        remainder, self.buffer = self.buffer, ""
        self.discarding = False
        return self._frame_lines([remainder])

    def _frame_lines(self, lines: list[str]) -> list[ProtocolMessage]:
        messages: list[ProtocolMessage] = []
        for line in lines:
            if not line.strip():
                continue
            try:
                messages.append(frame_line(line))
            except LineSyntaxError as e:
                self._log_error(str(e), line)
        return messages

    def _log_error(self, error: str, raw: str) -> None:
        logger.log_event(
            "irc",
            "framing_error",
            level=logging.WARNING,
            user=self.user,
            error=error,
            raw=raw,
        )
