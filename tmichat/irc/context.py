"""Narrow client interface handed to command handlers.

Handlers never see the client itself: they can read the session identity,
queue a line for the transport and publish a domain event.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .models import ClientIdentity


class ClientContext(Protocol):
    """Protocol for what a command handler may touch."""

    @property
    def identity(self) -> ClientIdentity:
        """The session identity (read-only)."""
        ...

    def send(self, line: str) -> None:
        """Queue one command line for the transport without blocking."""
        ...

    def publish(self, event: str, payload: Any = None) -> None:
        """Emit a domain event to client listeners and waiters."""
        ...


@dataclass(frozen=True, slots=True)
class SessionContext:
    identity: ClientIdentity
    sender: Callable[[str], None]
    publisher: Callable[[str, Any], Any]

    def send(self, line: str) -> None:
        self.sender(line)

    def publish(self, event: str, payload: Any = None) -> None:
        self.publisher(event, payload)
