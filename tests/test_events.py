"""
Tests for tmichat.irc.events.EventEmitter
"""

import asyncio
import logging

import pytest

from tmichat.irc.events import EventEmitter


class TestListeners:
    """Synchronous listener registration and delivery"""

    def test_emit_without_listeners(self):
        emitter = EventEmitter()
        assert emitter.emit("nothing", 1) is False

    def test_listeners_run_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("e", lambda p: calls.append(("a", p)))
        emitter.on("e", lambda p: calls.append(("b", p)))
        assert emitter.emit("e", 1) is True
        assert calls == [("a", 1), ("b", 1)]

    def test_off_removes_listener(self):
        emitter = EventEmitter()
        calls = []
        listener = emitter.on("e", calls.append)
        emitter.off("e", listener)
        emitter.off("e", listener)
        emitter.emit("e", 1)
        assert calls == []
        assert emitter.listener_count("e") == 0

    def test_once_fires_a_single_time(self):
        emitter = EventEmitter()
        calls = []
        emitter.once("e", calls.append)
        emitter.emit("e", 1)
        emitter.emit("e", 2)
        assert calls == [1]

    def test_failing_listener_isolated(self, caplog):
        emitter = EventEmitter(user="bot")
        calls = []

        def bad(_payload):
            raise ValueError("nope")

        emitter.on("e", bad)
        emitter.on("e", calls.append)
        caplog.set_level(logging.ERROR)
        emitter.emit("e", 1)
        assert calls == [1]
        assert any("Listener for e failed: nope" in r.message for r in caplog.records)


class TestWaiters:
    """Future based correlation"""

    @pytest.mark.asyncio
    async def test_once_by_resolves_on_first_match(self):
        emitter = EventEmitter()
        future = emitter.once_by("join", lambda p: p == "b")
        emitter.emit("join", "a")
        assert not future.done()
        emitter.emit("join", "b")
        assert await future == "b"
        assert emitter.listener_count("join") == 0

    @pytest.mark.asyncio
    async def test_wait_for_any_payload(self):
        emitter = EventEmitter()
        future = emitter.wait_for("connected")
        assert emitter.emit("connected") is True
        assert await future is None

    @pytest.mark.asyncio
    async def test_cancelled_waiter_is_discarded(self):
        emitter = EventEmitter()
        future = emitter.once_by("join", lambda p: True)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(future, 0.01)
        await asyncio.sleep(0)
        assert emitter.listener_count("join") == 0

    @pytest.mark.asyncio
    async def test_cancel_waiters_with_exception(self):
        emitter = EventEmitter()
        future = emitter.wait_for("connected")
        emitter.cancel_waiters(ConnectionError("gone"))
        with pytest.raises(ConnectionError):
            await future

    @pytest.mark.asyncio
    async def test_cancel_waiters_without_exception(self):
        emitter = EventEmitter()
        future = emitter.wait_for("connected")
        emitter.cancel_waiters()
        assert future.cancelled()


class TestAsyncListeners:
    @pytest.mark.asyncio
    async def test_coroutine_listener_is_scheduled(self):
        emitter = EventEmitter()
        seen = []

        async def listener(payload):
            seen.append(payload)

        emitter.on("e", listener)
        emitter.emit("e", "x")
        assert seen == []
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert seen == ["x"]

    @pytest.mark.asyncio
    async def test_coroutine_listener_failure_logged(self, caplog):
        emitter = EventEmitter()

        async def listener(_payload):
            raise RuntimeError("async boom")

        emitter.on("e", listener)
        caplog.set_level(logging.ERROR)
        emitter.emit("e")
        for _ in range(3):
            await asyncio.sleep(0)
        assert any("async boom" in r.message for r in caplog.records)
