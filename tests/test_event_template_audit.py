from __future__ import annotations

import string

from scripts.event_template_audit import diff, extract_references
from tmichat.logs.event_catalog import EVENT_TEMPLATES


def test_every_logged_event_has_a_template():
    result = diff()
    assert result.missing == set(), sorted(result.missing)


def test_templates_render_with_their_own_fields():
    failures = []
    for key, template in EVENT_TEMPLATES.items():
        fields = {name for _, name, _, _ in string.Formatter().parse(template) if name}
        try:
            template.format(**dict.fromkeys(fields, "x"))
        except (KeyError, IndexError, ValueError) as e:
            failures.append((key, str(e)))
    assert failures == []


def test_event_template_keys_lowercase():
    assert all(d == d.lower() and a == a.lower() for d, a in EVENT_TEMPLATES)


def test_extract_references_handles_ternary(tmp_path):
    source = tmp_path / "sample.py"
    source.write_text(
        "logger.log_event('irc', 'join_success' if ok else 'join_timeout')\n"
        "logger.log_event(domain='app', action='start')\n"
        "logger.log_event(dynamic, 'ignored')\n",
        encoding="utf-8",
    )
    assert extract_references([source]) == {
        ("irc", "join_success"),
        ("irc", "join_timeout"),
        ("app", "start"),
    }
