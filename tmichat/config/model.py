from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from ..constants import TMI_HOST, TMI_PORT, TMI_WS_URL


class ClientConfig(BaseModel):
    """Connection settings for one chat session.

    Attributes:
        user: Login name. Ignored for anonymous sessions.
        password: OAuth token, with or without the ``oauth:`` prefix. When
            missing the session is anonymous (read-only).
        channels: Channels to join after connecting.
        transport: ``"tcp"`` for IRC over TCP/TLS, ``"websocket"`` for the
            IRC-over-WebSocket endpoint.
        host: IRC server host for the TCP transport.
        port: IRC server port for the TCP transport.
        secure: Wrap the TCP connection in TLS.
        ws_url: WebSocket endpoint for the websocket transport.
        join_timeout: Seconds to wait for a join confirmation; None waits forever.
    """

    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    channels: list[str] = Field(default_factory=list)
    transport: Literal["tcp", "websocket"] = "tcp"
    host: str = TMI_HOST
    port: int = Field(default=TMI_PORT, gt=0, lt=65536)
    secure: bool = True
    ws_url: str = TMI_WS_URL
    join_timeout: float | None = Field(default=None, gt=0)

    @field_validator("user", "password", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        """Strip whitespace and leading '#', lowercase, drop empties and
        duplicates while keeping the configured order. A comma separated
        string is accepted as well."""
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        validated = []
        for c in v:
            if isinstance(c, str):
                stripped = c.strip().lstrip("#").lower()
                if stripped:
                    validated.append(stripped)
        return list(dict.fromkeys(validated))

    @property
    def anonymous(self) -> bool:
        return not self.password
