"""Async Twitch chat client: session state machine and public operations."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..config.model import ClientConfig
from ..constants import CAPABILITIES, LINE_DELIMITER, OAUTH_PREFIX
from ..errors import (
    ChatError,
    ConnectTimeoutError,
    JoinTimeoutError,
    NotConnectedError,
    TransportError,
)
from ..logs.logger import logger
from .channels import clean_channel, format_channel
from .context import SessionContext
from .dispatcher import CommandDispatcher
from .events import EventEmitter
from .framer import MessageFramer
from .models import (
    ChannelState,
    ClientIdentity,
    ConnectionState,
    JoinEvent,
    PartEvent,
)
from .transport import StreamTransport, Transport, WebSocketTransport


class TwitchChatClient(EventEmitter):  # pylint: disable=too-many-instance-attributes
    """Chat session over one transport.

    Events: ``connected``, ``disconnected``, ``error``, ``join``, ``part``,
    ``userstate``, ``message``, ``notice``, ``roomstate``, ``clearchat``,
    ``clearmsg``, ``usernotice``, ``whisper``, ``hosttarget``,
    ``globaluserstate`` and ``reconnect``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
        identity: ClientIdentity | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.identity = identity or ClientIdentity.create(
            self.config.user, self.config.password
        )
        super().__init__(user=self.identity.user)
        if self.config.user and self.identity.anonymous:
            logger.log_event(
                "irc",
                "anonymous_fallback",
                level=logging.WARNING,
                user=self.identity.user,
                configured_user=self.config.user,
            )
        self.transport = transport
        self.state = ConnectionState.DISCONNECTED
        self.channels: dict[str, ChannelState] = {}
        self.framer = MessageFramer(self.identity.user)
        self.context = SessionContext(
            identity=self.identity, sender=self._queue_line, publisher=self.emit
        )
        self.dispatcher = CommandDispatcher(self.context)
        self._reader_task: asyncio.Task[None] | None = None
        self._write_tasks: set[asyncio.Task[Any]] = set()
        self.on("connected", self._on_connected)
        self.on("join", self._on_join)
        self.on("part", self._on_part)
        self.on("error", self._on_error)

    async def __aenter__(self) -> TwitchChatClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.identity.user,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def _build_transport(self) -> Transport:
        if self.config.transport == "websocket":
            return WebSocketTransport(self.config.ws_url)
        return StreamTransport(self.config.host, self.config.port, self.config.secure)

    async def connect(self, timeout: float | None = None) -> None:
        """Open the transport, authenticate and wait for end-of-MOTD.

        Raises:
            TransportError: the connection could not be opened or dropped
                before authentication completed.
            AuthenticationError: the server rejected the credentials.
            ConnectTimeoutError: ``timeout`` elapsed first.
        """
        if self.state is ConnectionState.CONNECTED:
            return
        if self.state is not ConnectionState.DISCONNECTED:
            raise ChatError(f"connect() called while {self.state.name.lower()}")
        self._set_state(ConnectionState.CONNECTING)
        if self.transport is None:
            self.transport = self._build_transport()
        connected = self.wait_for("connected")
        failed = self.wait_for("error")
        logger.log_event("irc", "connect_start", user=self.identity.user)
        try:
            await self.transport.open()
        except TransportError as e:
            connected.cancel()
            self._set_state(ConnectionState.DISCONNECTED)
            self.emit("error", e)
            failed.cancel()
            raise

        self._set_state(ConnectionState.AUTHENTICATING)
        self._reader_task = asyncio.create_task(self._read_loop())
        try:
            await self.send_caps()
            await self.send_credentials()
        except ChatError as e:
            connected.cancel()
            failed.cancel()
            self.emit("error", e)
            await self.close()
            raise

        done, pending = await asyncio.wait(
            {connected, failed}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
        for future in pending:
            future.cancel()
        outcomes = [
            f.exception() or f.result() if f is failed else f.exception()
            for f in (failed, connected)
            if f.done() and not f.cancelled()
        ]
        errors = [
            o if isinstance(o, BaseException) else ChatError(str(o))
            for o in outcomes
            if o is not None
        ]
        if connected in done and not errors:
            logger.log_event("irc", "connect_success", user=self.identity.user)
            return
        await self.close()
        if errors:
            raise errors[0]
        raise ConnectTimeoutError(
            f"No end-of-MOTD within {timeout}s", data={"timeout": timeout}
        )

    async def write(self, data: str) -> bool:
        """Send one command line; return whether it was flushed immediately."""
        if self.transport is None or self.state is ConnectionState.DISCONNECTED:
            raise NotConnectedError("write() before connect()")
        line = data.strip()
        logger.log_event(
            "irc",
            "send",
            level=logging.DEBUG,
            user=self.identity.user,
            line="PASS ***" if line.startswith("PASS ") else line,
        )
        return await self.transport.write(line + LINE_DELIMITER)

    async def send_caps(self) -> bool:
        return await self.write(f"CAP REQ :{' '.join(CAPABILITIES)}")

    async def send_credentials(self) -> bool:
        password = self.identity.password
        if not password.startswith(OAUTH_PREFIX):
            password = OAUTH_PREFIX + password
        await self.write(f"PASS {password}")
        return await self.write(f"NICK {self.identity.user}")

    async def join(self, channel: str, timeout: float | None = None) -> JoinEvent:
        """JOIN ``channel`` and wait for the matching self-join event.

        ``timeout`` defaults to ``config.join_timeout``; with neither set the
        call waits until the join is confirmed or the connection drops.

        Raises:
            JoinTimeoutError: no confirmation within the timeout.
        """
        chan = format_channel(channel)
        clean = clean_channel(chan)
        confirmation = self.once_by(
            "join", lambda event: event.self and event.channel == clean
        )
        self.channels[clean] = ChannelState.JOINING
        logger.log_event("irc", "join_start", user=self.identity.user, channel=clean)
        try:
            await self.write(f"JOIN {chan}")
        except ChatError:
            confirmation.cancel()
            self.channels.pop(clean, None)
            raise
        if timeout is None:
            timeout = self.config.join_timeout
        try:
            event = await asyncio.wait_for(confirmation, timeout)
        except TimeoutError:
            if self.channels.get(clean) is ChannelState.JOINING:
                del self.channels[clean]
            logger.log_event(
                "irc",
                "join_timeout",
                level=logging.WARNING,
                user=self.identity.user,
                channel=clean,
                timeout=timeout,
            )
            raise JoinTimeoutError(clean, timeout) from None
        logger.log_event("irc", "join_success", user=self.identity.user, channel=clean)
        return event

    async def part(self, channel: str) -> bool:
        chan = format_channel(channel)
        flushed = await self.write(f"PART {chan}")
        self.channels[clean_channel(chan)] = ChannelState.PARTED
        return flushed

    async def say(self, channel: str, message: str) -> bool:
        # A line break would end the PRIVMSG and start a new command.
        text = " ".join(message.splitlines())
        return await self.write(f"PRIVMSG {format_channel(channel)} :{text}")

    def feed(self, chunk: str) -> None:
        """Frame and dispatch one transport chunk, in line order."""
        self.dispatcher.dispatch_all(self.framer.feed(chunk))

    async def close(self) -> None:
        task, self._reader_task = self._reader_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        was_open = await self._teardown()
        if was_open:
            self.emit("disconnected")
        self.cancel_waiters(NotConnectedError("client closed"))

    async def _read_loop(self) -> None:
        transport = self.transport
        if transport is None:
            return
        error: ChatError | None = None
        try:
            while True:
                chunk = await transport.read()
                if not chunk:
                    break
                self.feed(chunk)
        except ChatError as e:
            error = e
        else:
            self.dispatcher.dispatch_all(self.framer.flush())
        self._reader_task = None
        logger.log_event(
            "irc",
            "connection_closed",
            level=logging.WARNING,
            user=self.identity.user,
            error=str(error) if error else None,
        )
        if error is not None:
            self.emit("error", error)
        was_open = await self._teardown()
        if was_open:
            self.emit("disconnected", error)
        self.cancel_waiters(error or TransportError("connection closed"))

    async def _teardown(self) -> bool:
        was_open = self.state is not ConnectionState.DISCONNECTED
        transport, self.transport = self.transport, None
        self.framer.buffer = ""
        self.framer.discarding = False
        self.channels.clear()
        self._set_state(ConnectionState.DISCONNECTED)
        if transport is not None:
            await transport.close()
        return was_open

    def _queue_line(self, line: str) -> None:
        task = asyncio.get_running_loop().create_task(self.write(line))
        self._write_tasks.add(task)
        task.add_done_callback(self._on_write_done)

    def _on_write_done(self, task: asyncio.Task[Any]) -> None:
        self._write_tasks.discard(task)
        if task.cancelled() or task.exception() is None:
            return
        logger.log_event(
            "irc",
            "write_error",
            level=logging.ERROR,
            user=self.identity.user,
            error=str(task.exception()),
        )

    def _on_connected(self, _payload: Any) -> None:
        self._set_state(ConnectionState.CONNECTED)

    def _on_join(self, event: JoinEvent) -> None:
        if event.self:
            self.channels[event.channel] = ChannelState.JOINED

    def _on_part(self, event: PartEvent) -> None:
        if event.self:
            self.channels[event.channel] = ChannelState.PARTED

    def _on_error(self, error: Any) -> None:
        logger.log_event(
            "irc",
            "error",
            level=logging.ERROR,
            user=self.identity.user,
            error=str(error),
            error_type=type(error).__name__,
        )
