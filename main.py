#!/usr/bin/env python3
"""
Main entry point for the tmichat console client

Connects with the configured (or anonymous) identity, joins the configured
channels and logs chat activity until interrupted.
"""

import asyncio
import logging
import sys

from tmichat import ChatError, ConfigError, TwitchChatClient, load_config
from tmichat.irc import JoinEvent, MessageEvent, PartEvent
from tmichat.irc.models import NoticeEvent
from tmichat.logs.logger import logger


def _log_message(event: MessageEvent) -> None:
    text = f"* {event.message}" if event.is_action else event.message
    logger.log_event(
        "chat", "message", channel=event.channel, author=event.user, text=text
    )


def _log_join(event: JoinEvent) -> None:
    if not event.self:
        logger.log_event(
            "chat", "join", level=logging.DEBUG, channel=event.channel, author=event.user
        )


def _log_part(event: PartEvent) -> None:
    logger.log_event(
        "chat", "part", level=logging.DEBUG, channel=event.channel, author=event.user
    )


def _log_notice(event: NoticeEvent) -> None:
    logger.log_event("chat", "notice", channel=event.channel, text=event.message)


async def main():
    """Main function"""
    logger.log_event("app", "start")
    config = load_config()
    client = TwitchChatClient(config)
    client.on("message", _log_message)
    client.on("join", _log_join)
    client.on("part", _log_part)
    client.on("notice", _log_notice)
    disconnected = client.wait_for("disconnected")
    try:
        await client.connect()
        for channel in config.channels:
            await client.join(channel)
        await disconnected
    finally:
        await client.close()
        logger.log_event("app", "shutdown")


if __name__ == "__main__":
    # Validate configuration only
    if len(sys.argv) > 1 and sys.argv[1] == "--check-config":
        try:
            config = load_config()
        except ConfigError as e:
            logger.log_event("app", "config_error", level=logging.ERROR, error=str(e))
            sys.exit(1)
        logger.log_event(
            "config",
            "loaded",
            transport=config.transport,
            channels=len(config.channels),
        )
        sys.exit(0)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
    except ConfigError as e:
        logger.log_event("app", "config_error", level=logging.ERROR, error=str(e))
        sys.exit(1)
    except ChatError as e:
        logger.log_event("app", "fatal_error", level=logging.CRITICAL, error=str(e))
        sys.exit(1)
