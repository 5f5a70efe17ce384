"""Scanner dispatch."""

from __future__ import annotations

from pathlib import Path

from dep_analyzer.models import Hint
from dep_analyzer.scanner.base import BaseScanner
from dep_analyzer.scanner.hint_scanner import HintScanner, is_class_id, parse_hint_line


def scan_text(text: str, file_path: Path | None = None, strict: bool = True) -> list[Hint]:
    """Extract the ordered hints of one class's source text."""
    return HintScanner(strict=strict).scan_text(text, file_path)


def scan_file(file_path: Path, strict: bool = True) -> list[Hint]:
    return HintScanner(strict=strict).scan_file(file_path)


def scan_directory(
    directory: Path,
    skip_dirs: list[str] | None = None,
    extension: str = ".js",
    strict: bool = True,
) -> dict[Path, list[Hint]]:
    scanner = HintScanner(skip_dirs=skip_dirs, strict=strict, extensions=(extension,))
    return scanner.scan_directory(directory)


__all__ = [
    "BaseScanner",
    "HintScanner",
    "is_class_id",
    "parse_hint_line",
    "scan_directory",
    "scan_file",
    "scan_text",
]
