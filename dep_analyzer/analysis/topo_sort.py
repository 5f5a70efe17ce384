"""Deterministic topological sort with cycle detection."""

from __future__ import annotations

import enum
import logging

from dep_analyzer.errors import CyclicDependencyError, InternalInvariantError
from dep_analyzer.models import DependencyGraph

logger = logging.getLogger(__name__)


class VisitState(enum.Enum):
    UNVISITED = "unvisited"
    IN_PROGRESS = "in-progress"
    FINISHED = "finished"


def _walk(graph: DependencyGraph, edge_kind: str) -> list[str]:
    """Post-order DFS over one edge kind.

    Roots are the entry ids in their given order, then every remaining
    class in discovery order. Successors are followed in the order they
    were first referenced. Uses an explicit stack, so deep chains do not
    hit the recursion limit.
    """
    adjacency = graph.edges(edge_kind)
    state: dict[str, VisitState] = {}
    order: list[str] = []

    for root in [*graph.entry_ids, *graph.records]:
        if state.get(root, VisitState.UNVISITED) is not VisitState.UNVISITED:
            continue
        state[root] = VisitState.IN_PROGRESS
        stack = [(root, iter(adjacency.get(root, ())))]
        path = [root]

        while stack:
            node, successors = stack[-1]
            for succ in successors:
                succ_state = state.get(succ, VisitState.UNVISITED)
                if succ_state is VisitState.FINISHED:
                    continue
                if succ_state is VisitState.IN_PROGRESS:
                    raise CyclicDependencyError(path[path.index(succ):], edge_kind)
                if succ not in graph.records:
                    raise InternalInvariantError(
                        f"{node!r} has a {edge_kind} edge to {succ!r}, which is not in the graph"
                    )
                state[succ] = VisitState.IN_PROGRESS
                stack.append((succ, iter(adjacency.get(succ, ()))))
                path.append(succ)
                break
            else:
                stack.pop()
                path.pop()
                state[node] = VisitState.FINISHED
                order.append(node)

    return order


def sort_deps_topologically(graph: DependencyGraph, edge_kind: str = "load") -> list[str]:
    """Order every class after all of its dependencies of ``edge_kind``.

    Raises CyclicDependencyError on the first cycle; no partial order is
    returned.
    """
    order = _walk(graph, edge_kind)
    if len(order) != len(graph.records):
        raise InternalInvariantError(
            f"sorted {len(order)} class(es) but the graph holds {len(graph.records)}"
        )
    logger.info("sorted %d class(es) by %s dependencies", len(order), edge_kind)
    return order


def find_cycles(graph: DependencyGraph, edge_kind: str = "load") -> list[list[str]]:
    """List every elementary cycle over one edge kind.

    Each cycle is reported once, starting at its earliest class (entries
    first, then discovery order) and following edges in reference order.
    Paths from a start only pass through later classes, so no cycle is
    listed twice. The number of cycles can grow exponentially with dense
    graphs; this is meant for diagnostics on graphs the sort rejected.
    """
    adjacency = graph.edges(edge_kind)
    order = list(dict.fromkeys([*graph.entry_ids, *graph.records]))
    rank = {class_id: i for i, class_id in enumerate(order)}
    cycles: list[list[str]] = []

    for start in order:
        path = [start]
        on_path = {start}
        stack = [iter(adjacency.get(start, ()))]
        while stack:
            for succ in stack[-1]:
                if succ == start:
                    cycles.append(list(path))
                    continue
                if succ in on_path or rank.get(succ, -1) <= rank[start]:
                    continue
                path.append(succ)
                on_path.add(succ)
                stack.append(iter(adjacency.get(succ, ())))
                break
            else:
                stack.pop()
                on_path.discard(path.pop())

    return cycles
