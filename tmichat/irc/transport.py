"""Transport adapters: a connected, ordered text stream to the chat server.

The client only needs four operations, described by ``Transport``. Two
implementations are provided: raw TCP (optionally TLS) through asyncio
streams, and Twitch's IRC-over-WebSocket endpoint.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import ssl
from typing import Protocol

import websockets
from websockets.exceptions import ConnectionClosedOK, WebSocketException

from ..constants import (
    TMI_HOST,
    TMI_PORT,
    TMI_WS_URL,
    TRANSPORT_CONNECT_TIMEOUT,
    TRANSPORT_READ_SIZE,
)
from ..errors import NotConnectedError, TransportError
from ..logs.logger import logger


class Transport(Protocol):
    """Protocol for the connection the client reads from and writes to."""

    async def open(self) -> None:
        """Establish the connection."""
        ...

    async def read(self) -> str:
        """Return the next chunk of text, or an empty string at end of stream."""
        ...

    async def write(self, data: str) -> bool:
        """Send ``data``; return True when it was flushed without buffering."""
        ...

    async def close(self) -> None:
        """Close the connection; safe to call more than once."""
        ...


class StreamTransport:
    def __init__(
        self,
        host: str = TMI_HOST,
        port: int = TMI_PORT,
        secure: bool = True,
        connect_timeout: float = TRANSPORT_CONNECT_TIMEOUT,
    ) -> None:
        self.host = host
        self.port = port
        self.secure = secure
        self.connect_timeout = connect_timeout
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    async def open(self) -> None:
        ssl_context = ssl.create_default_context() if self.secure else None
        logger.log_event(
            "transport",
            "open",
            level=logging.DEBUG,
            host=self.host,
            port=self.port,
            secure=self.secure,
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port, ssl=ssl_context),
                timeout=self.connect_timeout,
            )
        except TimeoutError as e:
            raise TransportError(
                f"Timed out connecting to {self.host}:{self.port}",
                data={"timeout": self.connect_timeout},
            ) from e
        except OSError as e:
            raise TransportError(
                f"Could not connect to {self.host}:{self.port}: {e}"
            ) from e

    async def read(self) -> str:
        if not self.reader:
            raise NotConnectedError("transport is not open")
        while True:
            try:
                data = await self.reader.read(TRANSPORT_READ_SIZE)
            except OSError as e:
                raise TransportError(f"Read failed: {e}") from e
            text = self._decoder.decode(data, final=not data)
            # A chunk that ends mid-character decodes to nothing; "" means EOF.
            if text or not data:
                return text

    async def write(self, data: str) -> bool:
        if not self.writer:
            raise NotConnectedError("transport is not open")
        try:
            self.writer.write(data.encode("utf-8"))
            flushed = self.writer.transport.get_write_buffer_size() == 0
            await self.writer.drain()
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e
        return flushed

    async def close(self) -> None:
        writer, self.writer, self.reader = self.writer, None, None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "transport", "close_error", level=logging.WARNING, error=str(e)
            )


class WebSocketTransport:
    def __init__(
        self,
        url: str = TMI_WS_URL,
        connect_timeout: float = TRANSPORT_CONNECT_TIMEOUT,
    ) -> None:
        self.url = url
        self.connect_timeout = connect_timeout
        self.ws: websockets.ClientConnection | None = None

    async def open(self) -> None:
        logger.log_event("transport", "open_ws", level=logging.DEBUG, url=self.url)
        try:
            self.ws = await websockets.connect(
                self.url, open_timeout=self.connect_timeout
            )
        except (OSError, TimeoutError, WebSocketException) as e:
            raise TransportError(
                f"WebSocket connection to {self.url} failed: {e}"
            ) from e

    async def read(self) -> str:
        if not self.ws:
            raise NotConnectedError("transport is not open")
        try:
            frame = await self.ws.recv()
        except ConnectionClosedOK:
            return ""
        except WebSocketException as e:
            raise TransportError(f"WebSocket read failed: {e}") from e
        if isinstance(frame, bytes):
            return frame.decode("utf-8", errors="replace")
        return frame

    async def write(self, data: str) -> bool:
        if not self.ws:
            raise NotConnectedError("transport is not open")
        try:
            await self.ws.send(data)
        except WebSocketException as e:
            raise TransportError(f"WebSocket write failed: {e}") from e
        return True

    async def close(self) -> None:
        ws, self.ws = self.ws, None
        if ws is None:
            return
        try:
            await ws.close(code=1000)
        except WebSocketException as e:
            logger.log_event(
                "transport", "close_error", level=logging.WARNING, error=str(e)
            )
