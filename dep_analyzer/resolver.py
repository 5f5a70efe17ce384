"""Class id -> source file resolution across ordered root directories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Mapping, Sequence

from dep_analyzer.errors import DuplicateClassIdWarning

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    class_id: str  # canonical id, after alias rewriting
    path: Path | None = None
    duplicates: list[DuplicateClassIdWarning] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.path is not None


def apply_namespace_map(class_id: str, namespace_map: Mapping[str, str] | None) -> str:
    """Rewrite the longest alias prefix matching on a dot boundary."""
    if not namespace_map:
        return class_id
    best = None
    for alias in namespace_map:
        if class_id == alias or class_id.startswith(alias + "."):
            if best is None or len(alias) > len(best):
                best = alias
    if best is None:
        return class_id
    return namespace_map[best] + class_id[len(best):]


def class_id_from_path(path: str | Path, extension: str = ".js") -> str:
    """Turn a root-relative source path (``ns/pkg/Name.js``) into ``ns.pkg.Name``."""
    text = str(path).replace("\\", "/")
    if text.endswith(extension):
        text = text[: -len(extension)]
    return ".".join(part for part in PurePosixPath(text).parts if part not in ("", "."))


def normalize_class_id(entry: str, extension: str = ".js") -> str:
    if "/" in entry or "\\" in entry or entry.endswith(extension):
        return class_id_from_path(entry, extension)
    return entry


class Resolver:
    """Resolve class ids under root paths; the earliest root wins."""

    def __init__(
        self,
        root_paths: Sequence[Path | str],
        namespace_map: Mapping[str, str] | None = None,
        extension: str = ".js",
    ):
        self.root_paths = [Path(r) for r in root_paths]
        self.namespace_map = dict(namespace_map or {})
        self.extension = extension

    def canonical(self, class_id: str) -> str:
        return apply_namespace_map(class_id, self.namespace_map)

    def relative_path(self, class_id: str) -> Path:
        rel = Path(*class_id.split("."))
        return rel.with_name(rel.name + self.extension)

    def resolve_all(self, class_id: str) -> Resolution:
        """Rewrite ``class_id`` through the namespace map, then resolve it."""
        return self.resolve_canonical(self.canonical(class_id))

    def resolve_canonical(self, canonical: str) -> Resolution:
        """Check every root for an already rewritten id; later matches are duplicates."""
        rel = self.relative_path(canonical)
        resolution = Resolution(class_id=canonical)
        for root in self.root_paths:
            candidate = root / rel
            if not candidate.is_file():
                continue
            if resolution.path is None:
                resolution.path = candidate
            else:
                resolution.duplicates.append(
                    DuplicateClassIdWarning(canonical, resolution.path, candidate)
                )
        if resolution.path is None:
            logger.debug("%s not found under %d root(s)", canonical, len(self.root_paths))
        return resolution

    def resolve(self, class_id: str) -> Path | None:
        return self.resolve_all(class_id).path


def resolve(
    class_id: str,
    root_paths: Sequence[Path | str],
    namespace_map: Mapping[str, str] | None = None,
    extension: str = ".js",
) -> Path | None:
    return Resolver(root_paths, namespace_map, extension).resolve(class_id)
