"""Analysis orchestrator: collect -> sort -> translate -> index."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from dep_analyzer.analysis import (
    collect_deps_recursive,
    create_at_hints_index,
    sort_deps_topologically,
    translate_class_ids_to_paths,
)
from dep_analyzer.config import validate_config
from dep_analyzer.models import AnalysisResult, AnalyzerConfig

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]

_STAGES = ("Collecting", "Sorting", "Translating", "Indexing")


def run_analysis(
    config: AnalyzerConfig,
    progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> AnalysisResult:
    """Run the full analysis. Any fatal error aborts it; nothing partial is returned."""
    validate_config(config)
    total = len(_STAGES)

    def step(i: int) -> None:
        if progress:
            progress(_STAGES[i] if i < total else "Done", i, total)

    step(0)
    graph = collect_deps_recursive(
        config.root_paths,
        config.entry_ids,
        config.namespace_map,
        extension=config.extension,
        strict_hints=config.strict_hints,
        workers=config.workers,
        cancel=cancel,
    )

    step(1)
    load_order = sort_deps_topologically(graph, config.edge_kind)

    step(2)
    paths = translate_class_ids_to_paths(load_order, config.root_paths, extension=config.extension)

    step(3)
    hint_index = create_at_hints_index(graph)
    step(total)

    if graph.warnings:
        logger.info("analysis finished with %d warning(s)", len(graph.warnings))
    return AnalysisResult(graph=graph, load_order=load_order, paths=paths, hint_index=hint_index)
