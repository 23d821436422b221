"""Audit log_event calls against the event template catalog.

Usage:
  python scripts/event_template_audit.py [--json-output]

Exit code 1 when code references a (domain, action) pair that has no template.
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
PACKAGE_ROOT = ROOT / "tmichat"
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"
EXTRA_SOURCES = (ROOT / "main.py",)

EventKey = tuple[str, str]


def iter_python_files(root: Path = PACKAGE_ROOT) -> Iterable[Path]:
    yield from sorted(root.rglob("*.py"))
    for path in EXTRA_SOURCES:
        if path.exists():
            yield path


def _string_values(expr: ast.AST | None) -> set[str]:
    """String constants in ``expr``, including both arms of a ternary."""
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        return {expr.value}
    if isinstance(expr, ast.IfExp):
        return _string_values(expr.body) | _string_values(expr.orelse)
    return set()


def _references_in_call(node: ast.Call) -> set[EventKey]:
    domain_expr = node.args[0] if node.args else None
    action_expr = node.args[1] if len(node.args) > 1 else None
    for kw in node.keywords:
        if kw.arg == "domain":
            domain_expr = kw.value
        elif kw.arg == "action":
            action_expr = kw.value
    return {
        (domain, action)
        for domain in _string_values(domain_expr)
        for action in _string_values(action_expr)
    }


def extract_references(paths: Iterable[Path]) -> set[EventKey]:
    refs: set[EventKey] = set()
    for path in paths:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, SyntaxError) as e:
            print(f"Skipping {path}: {e}", file=sys.stderr)
            continue
        for node in ast.walk(tree):
            if (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "log_event"
            ):
                refs |= _references_in_call(node)
    return refs


def load_template_keys(path: Path = TEMPLATES_JSON) -> set[EventKey]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    return {
        (domain, action)
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action in actions
    }


@dataclass(slots=True)
class DiffResult:
    missing: set[EventKey]
    unused: set[EventKey]


def diff(paths: Iterable[Path] | None = None) -> DiffResult:
    refs = extract_references(iter_python_files() if paths is None else paths)
    templates = load_template_keys()
    return DiffResult(missing=refs - templates, unused=templates - refs)


def emit_human(result: DiffResult) -> None:
    print("Event Template Audit Report")
    print("===========================")
    for title, keys in (("Missing", result.missing), ("Unused", result.unused)):
        if not keys:
            print(f"No {title.lower()} templates found.")
            continue
        print(f"{title} templates ({len(keys)}):")
        for domain, action in sorted(keys):
            print(f"  - {domain}:{action}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Audit event templates vs code usages")
    parser.add_argument("--json-output", action="store_true", help="Emit JSON diff result")
    args = parser.parse_args(argv)
    result = diff()
    if args.json_output:
        print(
            json.dumps(
                {"missing": sorted(result.missing), "unused": sorted(result.unused)},
                indent=2,
            )
        )
    else:
        emit_human(result)
    return 1 if result.missing else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
