"""
Every literal (domain, action) passed to log_event must have a template.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "ircconnect"
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"


def _literals(expr: ast.AST) -> set[str]:
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        return {expr.value}
    if isinstance(expr, ast.IfExp):
        return _literals(expr.body) | _literals(expr.orelse)
    return set()


def _references() -> set[tuple[str, str]]:
    refs: set[tuple[str, str]] = set()
    for path in PACKAGE_ROOT.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if not (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "log_event"
                and len(node.args) >= 2
            ):
                continue
            for domain in _literals(node.args[0]):
                for action in _literals(node.args[1]):
                    refs.add((domain, action))
    return refs


def _templates() -> set[tuple[str, str]]:
    raw = json.loads(TEMPLATES_JSON.read_text(encoding="utf-8"))
    return {(domain, action) for domain, actions in raw.items() for action in actions}


def test_every_logged_event_has_a_template():
    refs = _references()
    assert refs
    assert refs - _templates() == set()


def test_no_unused_templates():
    assert _templates() - _references() == set()
