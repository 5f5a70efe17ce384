"""Graph construction, ordering and indexing."""

from dep_analyzer.analysis.graph_builder import GraphBuilder, collect_deps_recursive
from dep_analyzer.analysis.hint_index import create_at_hints_index, payloads_by_kind
from dep_analyzer.analysis.paths import translate_class_ids_to_paths
from dep_analyzer.analysis.topo_sort import VisitState, find_cycles, sort_deps_topologically

__all__ = [
    "GraphBuilder",
    "VisitState",
    "collect_deps_recursive",
    "create_at_hints_index",
    "find_cycles",
    "payloads_by_kind",
    "sort_deps_topologically",
    "translate_class_ids_to_paths",
]
