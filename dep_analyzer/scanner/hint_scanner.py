"""Hint scanner using a line grammar over comment annotations.

A hint line looks like ``@require(ns.pkg.Name)`` or the legacy
``#require(ns.pkg.Name)``, optionally preceded by a comment lead-in
(``*``, ``//``, ``/*``, ``/**``) and followed by ``*/``. Each line holds at
most one hint. Lines whose keyword is unknown, or that do not open a
parenthesis after the keyword (``@ignore this method``), are not hints.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from dep_analyzer.errors import HintParseError
from dep_analyzer.models import Hint, HintKind
from dep_analyzer.scanner.base import BaseScanner

logger = logging.getLogger(__name__)

_KEYWORDS = {kind.value: kind for kind in HintKind}

_HINT_START_RE = re.compile(
    r"^\s*(?:/\*+|//+|\*+)?\s*[@#](?P<keyword>[A-Za-z]+)\s*\((?P<rest>.*)$"
)
_ARGUMENT_RE = re.compile(r"^(?P<arg>[^()]*)\)\s*(?:\*+/)?\s*$")

_SEGMENT = r"[A-Za-z_$][\w$]*"
CLASS_ID_RE = re.compile(rf"^{_SEGMENT}(?:\.{_SEGMENT})*$")
CLASS_PATTERN_RE = re.compile(rf"^(?:{_SEGMENT}|\*)(?:\.(?:{_SEGMENT}|\*))*$")
_QUOTED_RE = re.compile(r"""^(?P<q>["'])(?P<body>.*)(?P=q)$""")


def is_class_id(text: str) -> bool:
    return bool(CLASS_ID_RE.match(text))


class HintScanner(BaseScanner):
    extensions = (".js",)

    def __init__(self, skip_dirs: list[str] | None = None, strict: bool = True,
                 extensions: tuple[str, ...] | None = None):
        super().__init__(skip_dirs=skip_dirs, strict=strict)
        if extensions:
            self.extensions = extensions

    def scan_text(self, text: str, file_path: Path | None = None) -> list[Hint]:
        hints: list[Hint] = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            try:
                hint = parse_hint_line(line, line_no, file_path)
            except HintParseError as e:
                if self.strict:
                    raise
                logger.warning("skipping malformed hint: %s", e)
                self.skipped.append(e)
                continue
            if hint is not None:
                hints.append(hint)
        return hints


def parse_hint_line(line: str, line_number: int = 0, file_path: Path | None = None) -> Hint | None:
    """Parse one line; None when the line is not a hint at all."""
    m = _HINT_START_RE.match(line)
    if not m:
        return None
    kind = _KEYWORDS.get(m.group("keyword"))
    if kind is None:
        return None

    def fail(reason: str) -> HintParseError:
        return HintParseError(file_path, line_number, line, reason)

    am = _ARGUMENT_RE.match(m.group("rest"))
    if not am:
        raise fail(f"@{kind.value} expects a single parenthesized argument")
    arg = am.group("arg").strip()

    if kind.targets_class:
        if not arg:
            raise fail(f"@{kind.value} is missing its class id")
        if "," in arg or any(c.isspace() for c in arg):
            raise fail(f"@{kind.value} takes exactly one class id")
        valid = CLASS_PATTERN_RE if kind is HintKind.IGNORE else CLASS_ID_RE
        if not valid.match(arg):
            raise fail(f"invalid class id {arg!r}")
        return Hint(kind, arg, line_number)

    qm = _QUOTED_RE.match(arg)
    if qm:
        arg = qm.group("body")
    elif any(c.isspace() for c in arg):
        raise fail(f"@{kind.value} takes a single argument; quote payloads containing spaces")
    if not arg and kind is not HintKind.CLDR:
        raise fail(f"@{kind.value} is missing its payload")
    return Hint(kind, arg, line_number)
