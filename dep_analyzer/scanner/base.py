"""Abstract base scanner."""

from __future__ import annotations

import abc
import fnmatch
import logging
from pathlib import Path

from dep_analyzer.models import Hint

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for hint scanners."""

    extensions: tuple[str, ...]

    def __init__(self, skip_dirs: list[str] | None = None, strict: bool = True):
        self.skip_dirs = skip_dirs or [
            "node_modules", ".git", "__pycache__", "build", "dist",
        ]
        self.strict = strict
        self.skipped: list[Exception] = []

    @abc.abstractmethod
    def scan_text(self, text: str, file_path: Path | None = None) -> list[Hint]:
        """Parse source text and return its hints in appearance order."""

    def scan_file(self, file_path: Path) -> list[Hint]:
        source = file_path.read_text(encoding="utf-8", errors="replace")
        return self.scan_text(source, file_path)

    def scan_directory(self, directory: Path) -> dict[Path, list[Hint]]:
        """Recursively scan a directory, keyed by file in sorted path order."""
        results: dict[Path, list[Hint]] = {}
        for path in sorted(directory.rglob("*")):
            if path.is_dir():
                continue
            if self._should_skip(path.relative_to(directory)):
                continue
            if path.suffix in self.extensions:
                results[path] = self.scan_file(path)
        logger.debug("scanned %d file(s) under %s", len(results), directory)
        return results

    def _should_skip(self, path: Path) -> bool:
        for part in path.parts:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
