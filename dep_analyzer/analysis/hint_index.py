"""Hint index: hint kind -> ids of the classes carrying that kind of hint."""

from __future__ import annotations

from dep_analyzer.models import DependencyGraph, HintKind


def create_at_hints_index(graph: DependencyGraph) -> dict[str, set[str]]:
    index: dict[str, set[str]] = {}
    for class_id, record in graph.records.items():
        for hint in record.hints:
            index.setdefault(hint.kind.value, set()).add(class_id)
    return index


def payloads_by_kind(graph: DependencyGraph, kind: HintKind) -> dict[str, list[str]]:
    """Per-class payloads of one kind, e.g. every asset pattern each class needs."""
    result: dict[str, list[str]] = {}
    for class_id, record in graph.records.items():
        payloads = [h.argument for h in record.hints_of(kind)]
        if payloads:
            result[class_id] = payloads
    return result
