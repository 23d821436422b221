"""Command dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..logs.logger import logger
from .context import ClientContext
from .handlers import DISPATCH_TABLE, Command, Handler, handle_unrecognized
from .models import ProtocolMessage


class CommandDispatcher:
    """Routes each message to its handler, one message at a time.

    Lookup is an exact, case-sensitive match on ``message.command``. Commands
    outside the known set go to ``handle_unrecognized``; a failing handler is
    logged and the next message is still processed.
    """

    def __init__(
        self,
        context: ClientContext,
        table: Mapping[Command, Handler] = DISPATCH_TABLE,
    ) -> None:
        self.context = context
        self.table = table

    def resolve(self, command: str) -> Handler:
        try:
            return self.table[Command(command)]
        except ValueError:
            return handle_unrecognized

    def dispatch(self, message: ProtocolMessage) -> None:
        handler = self.resolve(message.command)
        try:
            handler(message, self.context)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                user=self.context.identity.user,
                command=message.command,
                error=str(e),
                error_type=type(e).__name__,
                raw=message.raw,
            )

    def dispatch_all(self, messages: Iterable[ProtocolMessage]) -> None:
        for message in messages:
            self.dispatch(message)
