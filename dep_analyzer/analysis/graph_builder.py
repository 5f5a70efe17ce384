"""Dependency graph builder: computes the closure of a set of entry classes."""

from __future__ import annotations

import fnmatch
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from dep_analyzer.errors import AnalysisCancelledError, ConfigError, UnresolvedDependencyError
from dep_analyzer.models import ClassRecord, DependencyGraph, Hint, HintKind
from dep_analyzer.resolver import Resolution, Resolver, normalize_class_id
from dep_analyzer.scanner import HintScanner, is_class_id

logger = logging.getLogger(__name__)

_EDGE_HINTS = (HintKind.REQUIRE, HintKind.USE, HintKind.OPTIONAL)

_Scanned = tuple[Resolution, list[Hint], list[Exception]]


class GraphBuilder:
    """Build a dependency graph by scanning classes until no new ones turn up.

    Classes are processed strictly in the order they were first enqueued.
    With ``workers > 1`` the files of one frontier are read concurrently, but
    only the calling thread touches the graph, and it merges results in
    frontier order, so the graph is identical to a sequential run.
    """

    def __init__(
        self,
        root_paths: Sequence[Path | str],
        namespace_map: Mapping[str, str] | None = None,
        extension: str = ".js",
        strict_hints: bool = True,
        workers: int = 1,
        cancel: threading.Event | None = None,
    ):
        self.resolver = Resolver(root_paths, namespace_map, extension)
        self.extension = extension
        self.strict_hints = strict_hints
        self.workers = max(1, workers)
        self.cancel = cancel

    def build(self, entry_ids: Sequence[str]) -> DependencyGraph:
        graph = DependencyGraph()
        queued: set[str] = set()
        frontier: list[Resolution] = []

        for entry in entry_ids:
            class_id = self.resolver.canonical(normalize_class_id(entry, self.extension))
            if not is_class_id(class_id):
                raise ConfigError(f"invalid entry class id {entry!r}")
            if class_id in queued:
                continue
            frontier.append(self._resolve(graph, None, class_id))
            queued.add(class_id)
            graph.entry_ids.append(class_id)

        pool = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 else None
        try:
            while frontier:
                next_frontier: list[Resolution] = []
                for resolution, hints, skipped in self._scan_frontier(frontier, pool):
                    self._check_cancel()
                    record = ClassRecord(resolution.class_id, resolution.path, tuple(hints))
                    graph.records[record.class_id] = record
                    graph.skipped_hints.extend(skipped)
                    self._add_edges(graph, record, queued, next_frontier)
                    logger.debug("scanned %s: %d hint(s)", record.class_id, len(hints))
                frontier = next_frontier
        finally:
            if pool is not None:
                pool.shutdown(wait=True, cancel_futures=True)

        logger.info(
            "collected %d class(es) from %d entry point(s)",
            len(graph.records), len(graph.entry_ids),
        )
        return graph

    def _add_edges(
        self,
        graph: DependencyGraph,
        record: ClassRecord,
        queued: set[str],
        next_frontier: list[Resolution],
    ) -> None:
        ignores = [h.argument for h in record.hints_of(HintKind.IGNORE)]
        load = graph.load.setdefault(record.class_id, [])
        use = graph.use.setdefault(record.class_id, [])

        for hint in record.hints:
            if hint.kind not in _EDGE_HINTS:
                continue
            target = self.resolver.canonical(hint.argument)
            if _is_ignored(hint.argument, ignores) or _is_ignored(target, ignores):
                logger.debug("%s: ignoring %s", record.class_id, hint.argument)
                continue

            if target not in queued:
                if hint.kind is HintKind.OPTIONAL:
                    resolution = self.resolver.resolve_canonical(target)
                    if not resolution.found:
                        logger.debug("%s: optional %s not found, skipped", record.class_id, target)
                        continue
                    self._record_duplicates(graph, resolution)
                else:
                    resolution = self._resolve(graph, record.class_id, target)
                queued.add(target)
                next_frontier.append(resolution)

            edges = load if hint.kind is HintKind.REQUIRE else use
            if target not in edges:
                edges.append(target)

    def _resolve(self, graph: DependencyGraph, referrer: str | None, class_id: str) -> Resolution:
        """Resolve an id the namespace map has already rewritten."""
        resolution = self.resolver.resolve_canonical(class_id)
        if not resolution.found:
            raise UnresolvedDependencyError(referrer, class_id, self.resolver.root_paths)
        self._record_duplicates(graph, resolution)
        return resolution

    @staticmethod
    def _record_duplicates(graph: DependencyGraph, resolution: Resolution) -> None:
        for warning in resolution.duplicates:
            logger.warning("%s", warning)
            graph.warnings.append(warning)

    def _scan_frontier(
        self, frontier: list[Resolution], pool: ThreadPoolExecutor | None
    ) -> Iterator[_Scanned]:
        self._check_cancel()
        if pool is None or len(frontier) == 1:
            return self._scan_each(frontier)
        # map() yields in submission order regardless of completion order
        return pool.map(self._scan, frontier)

    def _scan_each(self, frontier: list[Resolution]) -> Iterator[_Scanned]:
        for resolution in frontier:
            self._check_cancel()
            yield self._scan(resolution)

    def _scan(self, resolution: Resolution) -> _Scanned:
        scanner = HintScanner(strict=self.strict_hints, extensions=(self.extension,))
        hints = scanner.scan_file(resolution.path)
        return resolution, hints, scanner.skipped

    def _check_cancel(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise AnalysisCancelledError("analysis cancelled")


def _is_ignored(class_id: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatchcase(class_id, p) for p in patterns)


def collect_deps_recursive(
    root_paths: Sequence[Path | str],
    entry_class_ids: Sequence[str],
    namespace_map: Mapping[str, str] | None = None,
    *,
    extension: str = ".js",
    strict_hints: bool = True,
    workers: int = 1,
    cancel: threading.Event | None = None,
) -> DependencyGraph:
    """Scan entry classes and everything they reference into one graph."""
    builder = GraphBuilder(
        root_paths,
        namespace_map,
        extension=extension,
        strict_hints=strict_hints,
        workers=workers,
        cancel=cancel,
    )
    return builder.build(entry_class_ids)
