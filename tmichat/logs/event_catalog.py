"""Human-readable text for ``BotLogger.log_event``.

Templates live in ``event_templates.json`` next to this module, grouped by
domain then action::

    {"irc": {"join_success": "✅ Joined channel"}}

Placeholders are filled from the event's context keywords.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

TEMPLATES_RESOURCE = "event_templates.json"

EventKey = tuple[str, str]

EVENT_TEMPLATES: dict[EventKey, str] = {}


def parse_templates(raw: Any) -> dict[EventKey, str]:
    """Flatten the domain -> action -> template document, skipping non-strings."""
    if not isinstance(raw, dict):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


def _load_event_templates() -> dict[EventKey, str]:
    resource = resources.files(__package__).joinpath(TEMPLATES_RESOURCE)
    try:
        return parse_templates(json.loads(resource.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates() -> None:
    # Updated in place so modules holding a reference see the new templates.
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_load_event_templates())


def render(domain: str, action: str, context: dict[str, object]) -> tuple[str, bool]:
    """Return ``(text, derived)`` for an event.

    Without a template the text is derived from the event name, e.g.
    ``("irc", "join_start")`` -> ``"irc: join start"``. A template whose
    placeholders are not all supplied is returned unformatted.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}", True
    try:
        return template.format(**context), False
    except (KeyError, IndexError, ValueError):
        return template, False


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "parse_templates", "reload_event_templates", "render"]
