"""Data models for the dependency analyzer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class HintKind(enum.Enum):
    REQUIRE = "require"
    USE = "use"
    OPTIONAL = "optional"
    IGNORE = "ignore"
    ASSET = "asset"
    CLDR = "cldr"
    LINT = "lint"

    @property
    def targets_class(self) -> bool:
        return self in _CLASS_KINDS


_CLASS_KINDS = frozenset({HintKind.REQUIRE, HintKind.USE, HintKind.OPTIONAL, HintKind.IGNORE})

EDGE_KINDS = ("load", "use")


@dataclass(frozen=True)
class Hint:
    """One annotation extracted from a source file."""
    kind: HintKind
    argument: str
    line_number: int = 0

    def __str__(self) -> str:
        return f"@{self.kind.value}({self.argument})"


@dataclass(frozen=True)
class ClassRecord:
    """Result from the scanning stage for one class."""
    class_id: str
    file_path: Path
    hints: tuple[Hint, ...] = ()

    def hints_of(self, *kinds: HintKind) -> list[Hint]:
        return [h for h in self.hints if h.kind in kinds]


@dataclass
class DependencyGraph:
    records: dict[str, ClassRecord] = field(default_factory=dict)  # insertion == discovery order
    load: dict[str, list[str]] = field(default_factory=dict)  # class_id -> [required ids]
    use: dict[str, list[str]] = field(default_factory=dict)  # class_id -> [used/optional ids]
    entry_ids: list[str] = field(default_factory=list)
    warnings: list[Warning] = field(default_factory=list)
    skipped_hints: list[Exception] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, class_id: object) -> bool:
        return class_id in self.records

    def edges(self, edge_kind: str = "load") -> dict[str, list[str]]:
        if edge_kind == "load":
            return self.load
        if edge_kind == "use":
            return self.use
        raise ValueError(f"Unknown edge kind {edge_kind!r}; expected one of {EDGE_KINDS}")

    def load_edges(self, class_id: str) -> list[str]:
        return list(self.load.get(class_id, []))

    def use_edges(self, class_id: str) -> list[str]:
        return list(self.use.get(class_id, []))

    def to_dict(self) -> dict[str, Any]:
        return {
            class_id: {
                "path": str(record.file_path),
                "hints": [str(h) for h in record.hints],
                "load": list(self.load.get(class_id, [])),
                "use": list(self.use.get(class_id, [])),
            }
            for class_id, record in self.records.items()
        }


@dataclass
class AnalyzerConfig:
    """Configuration for one analysis run."""
    root_paths: list[Path] = field(default_factory=list)
    entry_ids: list[str] = field(default_factory=list)
    namespace_map: dict[str, str] = field(default_factory=dict)
    extension: str = ".js"
    edge_kind: str = "load"
    strict_hints: bool = True
    workers: int = 1
    skip_dirs: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", "build", "dist",
    ])


@dataclass
class AnalysisResult:
    """Everything produced by a successful run."""
    graph: DependencyGraph
    load_order: list[str] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)
    hint_index: dict[str, set[str]] = field(default_factory=dict)

    @property
    def warnings(self) -> list[Warning]:
        return self.graph.warnings

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": list(self.graph.entry_ids),
            "load_order": list(self.load_order),
            "paths": [str(p) for p in self.paths],
            "hint_index": {kind: sorted(ids) for kind, ids in self.hint_index.items()},
            "classes": self.graph.to_dict(),
            "warnings": [str(w) for w in self.warnings],
            "skipped_hints": [str(e) for e in self.graph.skipped_hints],
        }
