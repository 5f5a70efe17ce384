"""Errors and warnings raised while analyzing class dependencies."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DepAnalyzerError(Exception):
    """Base class for every fatal analyzer error."""


class ConfigError(DepAnalyzerError):
    pass


class HintParseError(DepAnalyzerError):
    """A hint line that starts like a known hint but does not parse."""

    def __init__(self, file_path: Path | str | None, line_number: int, text: str, reason: str):
        self.file_path = file_path
        self.line_number = line_number
        self.text = text
        self.reason = reason
        where = f"{file_path or '<string>'}:{line_number}"
        super().__init__(f"{where}: {reason}: {text.strip()!r}")


class UnresolvedDependencyError(DepAnalyzerError):
    def __init__(self, class_id: str | None, missing_id: str, roots: Sequence[Path | str] = ()):
        self.class_id = class_id
        self.missing_id = missing_id
        self.roots = [str(r) for r in roots]
        referrer = f"{class_id!r} depends on" if class_id else "entry point"
        super().__init__(
            f"{referrer} {missing_id!r}, which was not found under any root: "
            f"{', '.join(self.roots) or '(no roots)'}"
        )


class CyclicDependencyError(DepAnalyzerError):
    """Carries the cycle as a chain, starting node first and not repeated."""

    def __init__(self, chain: Sequence[str], edge_kind: str = "load"):
        self.chain = list(chain)
        self.edge_kind = edge_kind
        loop = " -> ".join(self.chain + self.chain[:1])
        super().__init__(f"Cyclic {edge_kind} dependency: {loop}")


class InternalInvariantError(DepAnalyzerError):
    pass


class AnalysisCancelledError(DepAnalyzerError):
    pass


class DuplicateClassIdWarning(UserWarning):
    """Same class id found under more than one root; the first root wins."""

    def __init__(self, class_id: str, chosen: Path, duplicate: Path):
        self.class_id = class_id
        self.chosen = chosen
        self.duplicate = duplicate
        super().__init__(f"{class_id!r} found at {duplicate}, already resolved to {chosen}")
