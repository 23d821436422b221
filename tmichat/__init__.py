"""Twitch chat (TMI) client engine.

Frames the IRC stream, normalizes Twitch tags, dispatches commands to typed
handlers and exposes an asyncio client with ``connect``/``join``/``part``/``say``.
"""

from .config import ClientConfig, load_config
from .errors import (
    AuthenticationError,
    ChatError,
    ConfigError,
    ConnectTimeoutError,
    JoinTimeoutError,
    LineSyntaxError,
    NotConnectedError,
    TransportError,
)
from .irc import TwitchChatClient

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "ChatError",
    "ClientConfig",
    "ConfigError",
    "ConnectTimeoutError",
    "JoinTimeoutError",
    "LineSyntaxError",
    "NotConnectedError",
    "TransportError",
    "TwitchChatClient",
    "load_config",
]
