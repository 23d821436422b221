"""IRC subsystem package.

Contains the line tokenizer, tag normalizer, framer, command dispatch,
event layer, transports and the client state machine for Twitch chat.
"""

from .client import TwitchChatClient  # noqa: F401
from .dispatcher import CommandDispatcher  # noqa: F401
from .events import EventEmitter, JoinWaiter  # noqa: F401
from .framer import MessageFramer, frame_line  # noqa: F401
from .handlers import DISPATCH_TABLE, Command  # noqa: F401
from .models import (  # noqa: F401
    ChannelState,
    ClientIdentity,
    ConnectionState,
    JoinEvent,
    MessageEvent,
    PartEvent,
    Prefix,
    ProtocolMessage,
    UserStateEvent,
)
from .parser import ParsedLine, parse_line  # noqa: F401
from .tags import camel_case_key, normalize_tags, parse_complex_tag  # noqa: F401
from .transport import StreamTransport, Transport, WebSocketTransport  # noqa: F401

__all__ = [
    "ChannelState",
    "ClientIdentity",
    "Command",
    "CommandDispatcher",
    "ConnectionState",
    "DISPATCH_TABLE",
    "EventEmitter",
    "JoinEvent",
    "JoinWaiter",
    "MessageEvent",
    "MessageFramer",
    "ParsedLine",
    "PartEvent",
    "Prefix",
    "ProtocolMessage",
    "StreamTransport",
    "Transport",
    "TwitchChatClient",
    "UserStateEvent",
    "WebSocketTransport",
    "camel_case_key",
    "frame_line",
    "normalize_tags",
    "parse_complex_tag",
    "parse_line",
]
