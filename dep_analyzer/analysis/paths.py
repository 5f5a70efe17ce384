"""Class id list -> source path list."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from dep_analyzer.errors import InternalInvariantError
from dep_analyzer.resolver import Resolver


def translate_class_ids_to_paths(
    class_ids: Sequence[str],
    root_paths: Sequence[Path | str],
    namespace_map: Mapping[str, str] | None = None,
    extension: str = ".js",
) -> list[Path]:
    """Resolve each id with the same first-root-wins rule, keeping order.

    The ids come from a built graph, so a miss here is a bug, not bad input.
    """
    resolver = Resolver(root_paths, namespace_map, extension)
    paths: list[Path] = []
    for class_id in class_ids:
        path = resolver.resolve(class_id)
        if path is None:
            raise InternalInvariantError(
                f"{class_id!r} is in the dependency graph but resolves under no root"
            )
        paths.append(path)
    return paths
