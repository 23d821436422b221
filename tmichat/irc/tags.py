"""IRCv3 tag normalization.

Twitch sends tags as flat ``key=value`` strings with kebab-case keys. This
module rewrites them in place into the semantic shape handlers and callers
work with:

* keys become camelCase (``room-id`` -> ``roomId``),
* room/user flags become booleans,
* ``followers-only`` becomes ``False`` or a number of minutes,
* ``badges``, ``badge-info`` and ``emotes`` become nested mappings.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

BOOLEAN_TAGS = frozenset({"mod", "subsOnly", "r9k", "rituals", "slow", "emoteOnly"})
FOLLOWERS_ONLY_TAG = "followersOnly"

# key -> (primary, secondary, tertiary) delimiters
COMPLEX_TAGS: dict[str, tuple[str, str, str | None]] = {
    "badges": (",", "/", None),
    "badgeInfo": (",", "/", None),
    "emotes": ("/", ":", ","),
}


def camel_case_key(key: str) -> str:
    if "-" not in key:
        return key
    first, *rest = key.split("-")
    return first + "".join(seg[:1].upper() + seg[1:] for seg in rest)


def _coerce_followers_only(value: Any) -> Any:
    # -1 means disabled, 0 means "any follower" which we report as no restriction
    if value in ("-1", "0"):
        return False
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def parse_complex_tag(
    tags: MutableMapping[str, Any],
    key: str,
    primary: str = ",",
    secondary: str = "/",
    tertiary: str | None = None,
) -> MutableMapping[str, Any]:
    """Re-parse a multi-valued tag into a nested mapping.

    ``badges=subscriber/12,premium/1`` -> ``{"subscriber": "12", "premium": "1"}``
    and ``emotes=25:0-4,12-16/1902:6-10`` (with a tertiary split) ->
    ``{"25": ["0-4", "12-16"], "1902": ["6-10"]}``. Entries without a value
    map to ``None``. Absent tags are left absent.
    """
    if key not in tags:
        return tags
    raw = tags[key]
    parsed: dict[str, Any] = {}
    tags[key] = parsed
    if not isinstance(raw, str) or not raw:
        return tags
    for entry in raw.split(primary):
        if not entry:
            continue
        name, _, value = entry.partition(secondary)
        if tertiary is not None and value:
            parsed[name] = value.split(tertiary)
        else:
            parsed[name] = value or None
    return tags


def normalize_tags(tags: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Normalize a raw tag mapping in place and return it."""
    for raw_key in list(tags):
        value = tags.pop(raw_key)
        key = camel_case_key(raw_key)
        if key in BOOLEAN_TAGS:
            value = value == "1"
        elif key == FOLLOWERS_ONLY_TAG:
            value = _coerce_followers_only(value)
        tags[key] = value
    for key, (primary, secondary, tertiary) in COMPLEX_TAGS.items():
        parse_complex_tag(tags, key, primary, secondary, tertiary)
    return tags
