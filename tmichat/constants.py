"""
Configuration constants for the tmichat client engine

This module contains the protocol constants and connection defaults used throughout
the package. Numeric values can be overridden by setting an environment variable
with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same contract as ``_get_env_int`` for floating point values.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Server endpoints
TMI_HOST = os.getenv("TMI_HOST", "irc.chat.twitch.tv")
TMI_PORT = _get_env_int("TMI_PORT", 6697)  # TLS port; 6667 is plaintext
TMI_WS_URL = os.getenv("TMI_WS_URL", "wss://irc-ws.chat.twitch.tv:443")

# Transport tuning
TRANSPORT_READ_SIZE = _get_env_int(
    "TRANSPORT_READ_SIZE", 4096
)  # Max bytes read from the stream per chunk
TRANSPORT_CONNECT_TIMEOUT = _get_env_float(
    "TRANSPORT_CONNECT_TIMEOUT", 10.0
)  # Seconds allowed for the TCP/TLS or WebSocket handshake
MAX_LINE_LENGTH = _get_env_int(
    "MAX_LINE_LENGTH", 8704
)  # 8 KiB of tags plus a 512 byte IRC line; longer partial lines are dropped

# Protocol tokens
LINE_DELIMITER = "\r\n"
CHANNEL_MARKER = "#"
PONG_TARGET = "tmi.twitch.tv"
CAPABILITIES = ("twitch.tv/membership", "twitch.tv/tags", "twitch.tv/commands")
OAUTH_PREFIX = "oauth:"
ACTION_START = "\x01ACTION "
ACTION_END = "\x01"

# Anonymous (read-only) sessions
ANONYMOUS_USER_PREFIX = "justinfan"
ANONYMOUS_PASSWORD = "alcablah"  # Twitch accepts any PASS for justinfan logins
ANONYMOUS_SUFFIX_MIN = 30001
ANONYMOUS_SUFFIX_MAX = 100000
