"""Centralized error hierarchy.

These exceptions give callers semantic categories for the failures the chat
engine can surface. Framing errors and unknown commands are logged and never
reach the caller; the rest are raised from the public client operations.

Classes:
  ChatError            – Base for all package errors.
  TransportError       – Socket/WebSocket open, read or write failures.
  NotConnectedError    – A write was attempted without an open transport.
  LineSyntaxError      – A protocol line could not be tokenized.
  ConnectTimeoutError  – No end-of-MOTD within the caller's deadline.
  JoinTimeoutError     – No self-join confirmation within the caller's deadline.
  AuthenticationError  – The server rejected the PASS/NICK credentials.
  ConfigError          – Invalid or unreadable client configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class ChatError(Exception):
    """Base class for all tmichat errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        self.data = dict(data) if data else {}


class TransportError(ChatError):
    """Exception raised for network or transport layer errors.

    Wraps ``OSError`` and WebSocket failures raised while opening, reading
    from or writing to the underlying connection.
    """


class NotConnectedError(ChatError):
    """Exception raised when a command is written before ``connect()``."""


class LineSyntaxError(ChatError):
    """Exception raised when a single protocol line cannot be parsed.

    The offending line is available as ``data["line"]``.
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message, data={"line": line})
        self.line = line


class ConnectTimeoutError(ChatError, TimeoutError):
    """Exception raised when authentication does not complete in time."""


class JoinTimeoutError(ChatError, TimeoutError):
    """Exception raised when a JOIN is not confirmed in time.

    Args:
        channel: Clean channel name (without the ``#`` marker).
        timeout: The deadline that elapsed, in seconds.
    """

    def __init__(self, channel: str, timeout: float) -> None:
        super().__init__(
            f"JOIN #{channel} not confirmed within {timeout}s",
            data={"channel": channel, "timeout": timeout},
        )
        self.channel = channel
        self.timeout = timeout


class AuthenticationError(ChatError):
    """Exception raised when the server rejects the session credentials."""


class ConfigError(ChatError):
    """Exception raised for invalid or unreadable configuration."""


__all__ = [
    "ChatError",
    "TransportError",
    "NotConnectedError",
    "LineSyntaxError",
    "ConnectTimeoutError",
    "JoinTimeoutError",
    "AuthenticationError",
    "ConfigError",
]
