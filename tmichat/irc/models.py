"""Shared IRC data models."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from ..constants import (
    ANONYMOUS_PASSWORD,
    ANONYMOUS_SUFFIX_MAX,
    ANONYMOUS_SUFFIX_MIN,
    ANONYMOUS_USER_PREFIX,
)

TagValue = str | bool | int | dict[str, Any] | None


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    CONNECTED = auto()


class ChannelState(Enum):
    JOINING = auto()
    JOINED = auto()
    PARTED = auto()


@dataclass(frozen=True, slots=True)
class Prefix:
    name: str | None = None
    user: str | None = None
    host: str | None = None


@dataclass(frozen=True, slots=True)
class ProtocolMessage:
    """One framed protocol line with normalized tags.

    ``tail`` is the trailing free-text parameter and is kept out of
    ``params``. ``raw`` is the original line for diagnostics.
    """

    command: str
    tags: dict[str, TagValue] = field(default_factory=dict)
    params: tuple[str, ...] = ()
    tail: str | None = None
    prefix: Prefix = field(default_factory=Prefix)
    raw: str = ""


def generate_anonymous_name() -> str:
    """Return a random ``justinfan`` login for read-only sessions."""
    span = ANONYMOUS_SUFFIX_MAX - ANONYMOUS_SUFFIX_MIN + 1
    return f"{ANONYMOUS_USER_PREFIX}{ANONYMOUS_SUFFIX_MIN + secrets.randbelow(span)}"


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    user: str
    password: str = field(repr=False)
    anonymous: bool = False

    @classmethod
    def create(
        cls, user: str | None = None, password: str | None = None
    ) -> ClientIdentity:
        """Build the session identity.

        Without a password the session is anonymous: the login is generated
        and uniqueness is not guaranteed.
        """
        if not password:
            return cls(
                user=generate_anonymous_name(),
                password=ANONYMOUS_PASSWORD,
                anonymous=True,
            )
        if not user:
            raise ValueError("a login is required when a password is supplied")
        return cls(user=user.strip().lower(), password=password)


@dataclass(slots=True)
class JoinEvent:
    channel: str
    user: str | None
    self: bool
    raw: ProtocolMessage


@dataclass(slots=True)
class PartEvent:
    channel: str
    user: str | None
    self: bool
    raw: ProtocolMessage


@dataclass(slots=True)
class UserStateEvent:
    """Payload of ``userstate``.

    The normalized tags are kept under ``tags`` rather than spread onto the
    event, so tag keys cannot collide with ``channel`` or ``raw``.
    """

    channel: str
    tags: dict[str, TagValue]
    raw: ProtocolMessage


@dataclass(slots=True)
class MessageEvent:
    channel: str
    user: str | None
    message: str
    tags: dict[str, TagValue]
    is_action: bool
    self: bool
    raw: ProtocolMessage


@dataclass(slots=True)
class NoticeEvent:
    channel: str | None
    msg_id: str | None
    message: str | None
    raw: ProtocolMessage


@dataclass(slots=True)
class ClearChatEvent:
    """``target_user`` is None when the whole channel was cleared.

    ``ban_duration`` is set (seconds) for timeouts and None for permanent bans.
    """

    channel: str
    target_user: str | None
    ban_duration: int | None
    tags: dict[str, TagValue]
    raw: ProtocolMessage


@dataclass(slots=True)
class ClearMsgEvent:
    channel: str
    login: str | None
    target_msg_id: str | None
    message: str | None
    raw: ProtocolMessage


@dataclass(slots=True)
class RoomStateEvent:
    channel: str
    tags: dict[str, TagValue]
    raw: ProtocolMessage


@dataclass(slots=True)
class UserNoticeEvent:
    channel: str
    msg_id: str | None
    login: str | None
    message: str | None
    tags: dict[str, TagValue]
    raw: ProtocolMessage


@dataclass(slots=True)
class WhisperEvent:
    user: str | None
    target: str | None
    message: str | None
    tags: dict[str, TagValue]
    raw: ProtocolMessage


@dataclass(slots=True)
class HostTargetEvent:
    """``target`` is None when host mode ended."""

    channel: str
    target: str | None
    viewers: int | None
    raw: ProtocolMessage


@dataclass(slots=True)
class GlobalUserStateEvent:
    tags: dict[str, TagValue]
    raw: ProtocolMessage
