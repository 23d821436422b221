"""Event emission and one-shot correlation.

Listeners run synchronously in registration order. A listener that returns an
awaitable has it scheduled on the running loop; its failure is logged, never
propagated into dispatch.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..logs.logger import logger

Listener = Callable[[Any], Any]
Predicate = Callable[[Any], bool]


@dataclass(slots=True, eq=False)
class JoinWaiter:
    event: str
    predicate: Predicate
    future: asyncio.Future[Any]


class EventEmitter:
    def __init__(self, user: str | None = None) -> None:
        self.user = user
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)
        self._waiters: list[JoinWaiter] = []
        self._tasks: set[asyncio.Task[Any]] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners[event].append(listener)
        return listener

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def once(self, event: str, listener: Listener) -> Listener:
        def wrapper(payload: Any) -> Any:
            self.off(event, wrapper)
            return listener(payload)

        return self.on(event, wrapper)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ())) + sum(
            1 for w in self._waiters if w.event == event
        )

    def emit(self, event: str, payload: Any = None) -> bool:
        """Deliver ``payload`` to waiters then listeners.

        Returns True when anything was subscribed to ``event``.
        """
        delivered = self._resolve_waiters(event, payload)
        for listener in list(self._listeners.get(event, ())):
            delivered = True
            try:
                result = listener(payload)
            except Exception as e:  # noqa: BLE001
                self._log_listener_error(event, e)
                continue
            if inspect.isawaitable(result):
                self._schedule(event, result)
        return delivered

    def once_by(self, event: str, predicate: Predicate) -> asyncio.Future[Any]:
        """Return a future resolved by the first ``event`` payload matching ``predicate``.

        The waiter is removed as soon as it matches, or when the future is
        cancelled by the caller (for example on timeout).
        """
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        waiter = JoinWaiter(event=event, predicate=predicate, future=future)
        self._waiters.append(waiter)
        future.add_done_callback(lambda _: self._discard_waiter(waiter))
        return future

    def wait_for(self, event: str) -> asyncio.Future[Any]:
        return self.once_by(event, lambda _payload: True)

    def cancel_waiters(self, exc: BaseException | None = None) -> None:
        for waiter in list(self._waiters):
            if waiter.future.done():
                continue
            if exc is None:
                waiter.future.cancel()
            else:
                waiter.future.set_exception(exc)
        self._waiters.clear()

    def _resolve_waiters(self, event: str, payload: Any) -> bool:
        matched_any = False
        for waiter in list(self._waiters):
            if waiter.event != event:
                continue
            matched_any = True
            if waiter.future.done():
                continue
            try:
                matched = waiter.predicate(payload)
            except Exception as e:  # noqa: BLE001
                self._log_listener_error(event, e)
                continue
            if matched:
                self._discard_waiter(waiter)
                waiter.future.set_result(payload)
        return matched_any

    def _discard_waiter(self, waiter: JoinWaiter) -> None:
        if waiter in self._waiters:
            self._waiters.remove(waiter)

    def _schedule(self, event: str, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)

        def _done(t: asyncio.Task[Any]) -> None:
            self._tasks.discard(t)
            if not t.cancelled() and t.exception() is not None:
                self._log_listener_error(event, t.exception())

        task.add_done_callback(_done)

    def _log_listener_error(self, event: str, error: BaseException | None) -> None:
        logger.log_event(
            "irc",
            "listener_error",
            level=logging.ERROR,
            user=self.user,
            event=event,
            error=str(error),
            error_type=type(error).__name__,
        )
