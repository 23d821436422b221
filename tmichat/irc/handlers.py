"""Per-command handlers and the dispatch table.

Every known command is a member of ``Command`` and has exactly one handler in
``DISPATCH_TABLE``. Handlers read the message record directly and talk to the
client only through a ``ClientContext``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from enum import StrEnum
from types import MappingProxyType

from ..constants import ACTION_END, ACTION_START, PONG_TARGET
from ..errors import AuthenticationError
from ..logs.logger import logger
from .channels import clean_channel
from .context import ClientContext
from .models import (
    ClearChatEvent,
    ClearMsgEvent,
    GlobalUserStateEvent,
    HostTargetEvent,
    JoinEvent,
    MessageEvent,
    NoticeEvent,
    PartEvent,
    ProtocolMessage,
    RoomStateEvent,
    UserNoticeEvent,
    UserStateEvent,
    WhisperEvent,
)

Handler = Callable[[ProtocolMessage, ClientContext], None]

AUTH_FAILURE_NOTICES = ("Login authentication failed", "Improperly formatted auth")


class Command(StrEnum):
    CAP = "CAP"
    MODE = "MODE"
    CLEARCHAT = "CLEARCHAT"
    CLEARMSG = "CLEARMSG"
    GLOBALUSERSTATE = "GLOBALUSERSTATE"
    HOSTTARGET = "HOSTTARGET"
    JOIN = "JOIN"
    NOTICE = "NOTICE"
    PART = "PART"
    PING = "PING"
    PRIVMSG = "PRIVMSG"
    RECONNECT = "RECONNECT"
    ROOMSTATE = "ROOMSTATE"
    USERNOTICE = "USERNOTICE"
    USERSTATE = "USERSTATE"
    WHISPER = "WHISPER"
    RPL_WELCOME = "001"
    RPL_YOURHOST = "002"
    RPL_CREATED = "003"
    RPL_MYINFO = "004"
    RPL_NAMREPLY = "353"
    RPL_ENDOFNAMES = "366"
    RPL_MOTD = "372"
    RPL_MOTDSTART = "375"
    RPL_ENDOFMOTD = "376"


def _channel(message: ProtocolMessage) -> str:
    # Some servers send "JOIN :#chan", so fall back to the tail.
    if message.params:
        return clean_channel(message.params[0])
    return clean_channel(message.tail or "")


def _tag_str(message: ProtocolMessage, key: str) -> str | None:
    value = message.tags.get(key)
    return value if isinstance(value, str) and value else None


def _log_command(message: ProtocolMessage, ctx: ClientContext) -> None:
    logger.log_event(
        "irc",
        "command",
        level=logging.DEBUG,
        user=ctx.identity.user,
        command=message.command,
        raw=message.raw,
    )


def noop(message: ProtocolMessage, ctx: ClientContext) -> None:
    return None


def handle_unrecognized(message: ProtocolMessage, ctx: ClientContext) -> None:
    logger.log_event(
        "irc",
        "unknown_command",
        level=logging.INFO,
        user=ctx.identity.user,
        command=message.command,
        params=message.params,
        tail=message.tail,
        tags=message.tags,
        raw=message.raw,
    )


def handle_end_of_motd(message: ProtocolMessage, ctx: ClientContext) -> None:
    ctx.publish("connected")


def handle_ping(message: ProtocolMessage, ctx: ClientContext) -> None:
    ctx.send(f"PONG :{PONG_TARGET}")


def handle_join(message: ProtocolMessage, ctx: ClientContext) -> None:
    """Emit ``join`` for other users.

    The echo of our own JOIN is dropped for logged-in sessions, which learn
    about completed joins from USERSTATE. Anonymous sessions never receive
    USERSTATE, so for them the echo is the confirmation.
    """
    identity = ctx.identity
    user = message.prefix.user
    is_same_name = user == identity.user
    if is_same_name and not identity.anonymous:
        return
    ctx.publish(
        "join",
        JoinEvent(
            channel=_channel(message),
            user=user,
            self=identity.anonymous and is_same_name,
            raw=message,
        ),
    )


def handle_part(message: ProtocolMessage, ctx: ClientContext) -> None:
    user = message.prefix.user
    ctx.publish(
        "part",
        PartEvent(
            channel=_channel(message),
            user=user,
            self=user == ctx.identity.user,
            raw=message,
        ),
    )


def handle_userstate(message: ProtocolMessage, ctx: ClientContext) -> None:
    channel = _channel(message)
    ctx.publish(
        "join",
        JoinEvent(channel=channel, user=ctx.identity.user, self=True, raw=message),
    )
    ctx.publish(
        "userstate", UserStateEvent(channel=channel, tags=dict(message.tags), raw=message)
    )


def unwrap_action(message: ProtocolMessage) -> ProtocolMessage:
    """Return a copy flagged with ``isAction`` and, for /me messages, the
    CTCP ACTION wrapper removed from the tail."""
    tail = message.tail or ""
    is_action = (
        len(tail) >= len(ACTION_START) + len(ACTION_END)
        and tail.startswith(ACTION_START)
        and tail.endswith(ACTION_END)
    )
    if is_action:
        tail = tail[len(ACTION_START) : -len(ACTION_END)]
    return replace(
        message,
        tags={**message.tags, "isAction": is_action},
        tail=tail if is_action else message.tail,
    )


def handle_privmsg(message: ProtocolMessage, ctx: ClientContext) -> None:
    message = unwrap_action(message)
    user = message.prefix.user or message.prefix.name
    channel = _channel(message)
    text = message.tail or ""
    logger.log_event(
        "irc",
        "privmsg",
        level=logging.DEBUG,
        user=ctx.identity.user,
        channel=channel,
        human=f"{user}: {text}",
    )
    ctx.publish(
        "message",
        MessageEvent(
            channel=channel,
            user=user,
            message=text,
            tags=message.tags,
            is_action=bool(message.tags["isAction"]),
            self=user == ctx.identity.user,
            raw=message,
        ),
    )


def handle_notice(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    target = message.params[0] if message.params else None
    channel = clean_channel(target) if target and target != "*" else None
    text = message.tail
    ctx.publish(
        "notice",
        NoticeEvent(
            channel=channel, msg_id=_tag_str(message, "msgId"), message=text, raw=message
        ),
    )
    if channel is None and text and text.startswith(AUTH_FAILURE_NOTICES):
        ctx.publish("error", AuthenticationError(text, data={"raw": message.raw}))


def handle_clearchat(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    duration = _tag_str(message, "banDuration")
    ctx.publish(
        "clearchat",
        ClearChatEvent(
            channel=_channel(message),
            target_user=message.tail or None,
            ban_duration=int(duration) if duration and duration.isdigit() else None,
            tags=dict(message.tags),
            raw=message,
        ),
    )


def handle_clearmsg(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    ctx.publish(
        "clearmsg",
        ClearMsgEvent(
            channel=_channel(message),
            login=_tag_str(message, "login"),
            target_msg_id=_tag_str(message, "targetMsgId"),
            message=message.tail,
            raw=message,
        ),
    )


def handle_globaluserstate(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    ctx.publish(
        "globaluserstate", GlobalUserStateEvent(tags=dict(message.tags), raw=message)
    )


def handle_hosttarget(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    target, _, viewers = (message.tail or "").partition(" ")
    ctx.publish(
        "hosttarget",
        HostTargetEvent(
            channel=_channel(message),
            target=None if target in ("", "-") else target,
            viewers=int(viewers) if viewers.isdigit() else None,
            raw=message,
        ),
    )


def handle_reconnect(message: ProtocolMessage, ctx: ClientContext) -> None:
    logger.log_event(
        "irc", "server_reconnect", level=logging.WARNING, user=ctx.identity.user
    )
    ctx.publish("reconnect", message)


def handle_roomstate(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    ctx.publish(
        "roomstate",
        RoomStateEvent(channel=_channel(message), tags=dict(message.tags), raw=message),
    )


def handle_usernotice(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    ctx.publish(
        "usernotice",
        UserNoticeEvent(
            channel=_channel(message),
            msg_id=_tag_str(message, "msgId"),
            login=_tag_str(message, "login"),
            message=message.tail,
            tags=dict(message.tags),
            raw=message,
        ),
    )


def handle_whisper(message: ProtocolMessage, ctx: ClientContext) -> None:
    _log_command(message, ctx)
    ctx.publish(
        "whisper",
        WhisperEvent(
            user=message.prefix.user or message.prefix.name,
            target=message.params[0] if message.params else None,
            message=message.tail,
            tags=dict(message.tags),
            raw=message,
        ),
    )


DISPATCH_TABLE: Mapping[Command, Handler] = MappingProxyType(
    {
        Command.CAP: noop,
        Command.MODE: noop,
        Command.CLEARCHAT: handle_clearchat,
        Command.CLEARMSG: handle_clearmsg,
        Command.GLOBALUSERSTATE: handle_globaluserstate,
        Command.HOSTTARGET: handle_hosttarget,
        Command.JOIN: handle_join,
        Command.NOTICE: handle_notice,
        Command.PART: handle_part,
        Command.PING: handle_ping,
        Command.PRIVMSG: handle_privmsg,
        Command.RECONNECT: handle_reconnect,
        Command.ROOMSTATE: handle_roomstate,
        Command.USERNOTICE: handle_usernotice,
        Command.USERSTATE: handle_userstate,
        Command.WHISPER: handle_whisper,
        Command.RPL_WELCOME: noop,
        Command.RPL_YOURHOST: noop,
        Command.RPL_CREATED: noop,
        Command.RPL_MYINFO: noop,
        Command.RPL_NAMREPLY: noop,
        Command.RPL_ENDOFNAMES: noop,
        Command.RPL_MOTD: noop,
        Command.RPL_MOTDSTART: noop,
        Command.RPL_ENDOFMOTD: handle_end_of_motd,
    }
)

_unhandled = set(Command) - set(DISPATCH_TABLE)
if _unhandled:  # pragma: no cover - import-time guard
    raise RuntimeError(f"commands without handler: {sorted(_unhandled)}")
