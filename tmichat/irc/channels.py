"""Channel name helpers shared by handlers and outgoing commands."""

from __future__ import annotations

from ..constants import CHANNEL_MARKER


def clean_channel(channel: str) -> str:
    """Return a channel name without the leading ``#`` (event payload form)."""
    return channel[1:] if channel.startswith(CHANNEL_MARKER) else channel


def format_channel(channel: str) -> str:
    """Return the lowercase ``#channel`` form used in outgoing commands."""
    channel = channel.strip().lower()
    return channel if channel.startswith(CHANNEL_MARKER) else CHANNEL_MARKER + channel
