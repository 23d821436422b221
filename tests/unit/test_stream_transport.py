"""
Unit tests for StreamTransport.
"""

import ssl
from unittest.mock import AsyncMock, Mock, patch

import pytest

from tmichat.errors import NotConnectedError, TransportError
from tmichat.irc.transport import StreamTransport


def make_streams(chunks=(b"",), buffered=0):
    reader = Mock()
    reader.read = AsyncMock(side_effect=list(chunks))
    writer = Mock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    writer.transport.get_write_buffer_size.return_value = buffered
    return reader, writer


class TestStreamTransport:
    """Test class for StreamTransport functionality."""

    def test_init_defaults(self):
        """Test defaults point at the public TMI endpoint over TLS."""
        transport = StreamTransport()
        assert transport.host == "irc.chat.twitch.tv"
        assert transport.port == 6697
        assert transport.secure is True
        assert transport.writer is None

    @pytest.mark.asyncio
    async def test_open_uses_tls_context(self):
        """Test open wraps the connection in TLS when secure."""
        with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_open:
            mock_open.return_value = make_streams()
            transport = StreamTransport("example.test", 6697)
            await transport.open()

        args, kwargs = mock_open.call_args
        assert args == ("example.test", 6697)
        assert isinstance(kwargs["ssl"], ssl.SSLContext)

    @pytest.mark.asyncio
    async def test_open_plain(self):
        """Test open without TLS passes no ssl context."""
        with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_open:
            mock_open.return_value = make_streams()
            await StreamTransport("example.test", 6667, secure=False).open()

        assert mock_open.call_args.kwargs["ssl"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc", [OSError("refused"), TimeoutError()])
    async def test_open_failure_wrapped(self, exc):
        """Test socket errors and timeouts surface as TransportError."""
        with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_open:
            mock_open.side_effect = exc
            with pytest.raises(TransportError):
                await StreamTransport().open()

    @pytest.mark.asyncio
    async def test_read_decodes_and_signals_eof(self):
        """Test read returns text and an empty string at end of stream."""
        transport = StreamTransport()
        transport.reader, transport.writer = make_streams([b"PING :x\r\n", b""])
        assert await transport.read() == "PING :x\r\n"
        assert await transport.read() == ""

    @pytest.mark.asyncio
    async def test_read_joins_split_multibyte_character(self):
        """Test a character split across reads is not mistaken for EOF."""
        transport = StreamTransport()
        transport.reader, transport.writer = make_streams([b"\xe2\x82", b"\xac!", b""])
        assert await transport.read() == "€!"
        assert await transport.read() == ""

    @pytest.mark.asyncio
    async def test_read_error_wrapped(self):
        """Test socket errors while reading become TransportError."""
        transport = StreamTransport()
        transport.reader, transport.writer = make_streams([ConnectionResetError("reset")])
        with pytest.raises(TransportError):
            await transport.read()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("buffered", "flushed"), [(0, True), (128, False)])
    async def test_write_reports_flush(self, buffered, flushed):
        """Test write encodes, drains and reports whether data was buffered."""
        transport = StreamTransport()
        transport.reader, transport.writer = make_streams(buffered=buffered)
        assert await transport.write("PONG :tmi.twitch.tv\r\n") is flushed
        transport.writer.write.assert_called_once_with(b"PONG :tmi.twitch.tv\r\n")
        transport.writer.drain.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_open(self):
        """Test read and write before open raise NotConnectedError."""
        transport = StreamTransport()
        with pytest.raises(NotConnectedError):
            await transport.read()
        with pytest.raises(NotConnectedError):
            await transport.write("x")

    @pytest.mark.asyncio
    async def test_close_twice(self):
        """Test close releases the writer and tolerates a second call."""
        transport = StreamTransport()
        reader, writer = make_streams()
        transport.reader, transport.writer = reader, writer
        await transport.close()
        await transport.close()
        writer.close.assert_called_once()
        writer.wait_closed.assert_awaited_once()
        assert transport.reader is None

    @pytest.mark.asyncio
    async def test_close_error_logged(self, caplog):
        """Test an error while closing is logged, not raised."""
        transport = StreamTransport()
        reader, writer = make_streams()
        writer.wait_closed.side_effect = OSError("broken pipe")
        transport.reader, transport.writer = reader, writer
        await transport.close()
        assert any("broken pipe" in r.message for r in caplog.records)
