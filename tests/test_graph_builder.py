"""Tests for closure computation."""

import threading

import pytest

from dep_analyzer.analysis import collect_deps_recursive, sort_deps_topologically
from dep_analyzer.analysis.graph_builder import GraphBuilder
from dep_analyzer.errors import (
    AnalysisCancelledError,
    ConfigError,
    DuplicateClassIdWarning,
    HintParseError,
    UnresolvedDependencyError,
)


def test_require_chain(root, make_class):
    make_class(root, "ns.C", "@require(ns.B)")
    make_class(root, "ns.B", "@require(ns.A)")
    make_class(root, "ns.A")

    graph = collect_deps_recursive([root], ["ns.C"], {})

    assert list(graph.records) == ["ns.C", "ns.B", "ns.A"]
    assert graph.load_edges("ns.C") == ["ns.B"]
    assert graph.load_edges("ns.A") == []
    assert sort_deps_topologically(graph) == ["ns.A", "ns.B", "ns.C"]


def test_discovery_order_is_fifo(root, make_class):
    make_class(root, "e.Entry", "@use(e.X)", "@require(e.Y)")
    make_class(root, "e.X", "@require(e.Z)")
    make_class(root, "e.Y")
    make_class(root, "e.Z")

    graph = collect_deps_recursive([root], ["e.Entry"])
    assert list(graph.records) == ["e.Entry", "e.X", "e.Y", "e.Z"]
    assert graph.use_edges("e.Entry") == ["e.X"]
    assert graph.load_edges("e.Entry") == ["e.Y"]


def test_ignored_target_is_never_resolved(root, make_class):
    make_class(root, "ns.Entry", "@require(ns.Missing)", "@ignore(ns.Missing)")

    graph = collect_deps_recursive([root], ["ns.Entry"])
    assert "ns.Missing" not in graph
    assert graph.load_edges("ns.Entry") == []


def test_ignore_pattern(root, make_class):
    make_class(root, "ns.Entry", "@ignore(qx.*)", "@use(qx.core.Object)", "@use(qx.bom.Event)")

    graph = collect_deps_recursive([root], ["ns.Entry"])
    assert list(graph.records) == ["ns.Entry"]


def test_ignore_is_per_class(root, make_class):
    make_class(root, "ns.Entry", "@ignore(ns.Missing)", "@require(ns.Other)")
    make_class(root, "ns.Other", "@use(ns.Missing)")

    with pytest.raises(UnresolvedDependencyError) as exc:
        collect_deps_recursive([root], ["ns.Entry"])
    assert exc.value.class_id == "ns.Other"
    assert exc.value.missing_id == "ns.Missing"


def test_unresolved_dependency(root, make_class):
    make_class(root, "ns.Entry", "@require(ns.Gone)")

    with pytest.raises(UnresolvedDependencyError) as exc:
        collect_deps_recursive([root], ["ns.Entry"])
    message = str(exc.value)
    assert "ns.Entry" in message
    assert "ns.Gone" in message
    assert str(root) in message


def test_unresolved_entry(root):
    with pytest.raises(UnresolvedDependencyError) as exc:
        collect_deps_recursive([root], ["ns.Nothing"])
    assert exc.value.class_id is None


def test_optional_missing_is_skipped(root, make_class):
    make_class(root, "ns.Entry", "@optional(ns.Maybe)", "@optional(ns.There)")
    make_class(root, "ns.There")

    graph = collect_deps_recursive([root], ["ns.Entry"])
    assert list(graph.records) == ["ns.Entry", "ns.There"]
    assert graph.use_edges("ns.Entry") == ["ns.There"]


def test_duplicate_hints_make_one_edge(root, make_class):
    make_class(root, "ns.Entry", "@require(ns.A)", "@require(ns.A)", "@use(ns.A)")
    make_class(root, "ns.A")

    graph = collect_deps_recursive([root], ["ns.Entry"])
    assert graph.load_edges("ns.Entry") == ["ns.A"]
    assert graph.use_edges("ns.Entry") == ["ns.A"]


def test_duplicate_entries_and_path_entries(root, make_class):
    make_class(root, "ns.Entry")

    graph = collect_deps_recursive([root], ["ns.Entry", "ns/Entry.js"])
    assert graph.entry_ids == ["ns.Entry"]
    assert len(graph) == 1


def test_namespace_map_canonicalizes(root, make_class):
    make_class(root, "depTest.Application", "@require(deptest.Theme)")
    make_class(root, "depTest.Theme")

    graph = collect_deps_recursive([root], ["deptest/Application.js"], {"deptest": "depTest"})
    assert list(graph.records) == ["depTest.Application", "depTest.Theme"]
    assert graph.load_edges("depTest.Application") == ["depTest.Theme"]


def test_duplicate_warnings_collected(tmp_path, make_class):
    r1, r2 = tmp_path / "r1", tmp_path / "r2"
    make_class(r1, "ns.Foo", "@require(ns.Bar)")
    make_class(r2, "ns.Foo")
    make_class(r2, "ns.Bar")

    graph = collect_deps_recursive([r1, r2], ["ns.Foo"])
    assert graph.records["ns.Foo"].file_path.parent.parent == r1
    assert len(graph.warnings) == 1
    assert isinstance(graph.warnings[0], DuplicateClassIdWarning)


def test_strict_hint_errors_are_fatal(root, make_class):
    make_class(root, "ns.Entry", "@require()")
    with pytest.raises(HintParseError):
        collect_deps_recursive([root], ["ns.Entry"])


def test_lenient_hint_errors_are_recorded(root, make_class):
    make_class(root, "ns.Entry", "@require()", "@require(ns.A)")
    make_class(root, "ns.A")

    graph = collect_deps_recursive([root], ["ns.Entry"], strict_hints=False)
    assert list(graph.records) == ["ns.Entry", "ns.A"]
    assert len(graph.skipped_hints) == 1


def test_cycles_do_not_stop_collection(root, make_class):
    make_class(root, "ns.A", "@require(ns.B)")
    make_class(root, "ns.B", "@require(ns.A)")

    graph = collect_deps_recursive([root], ["ns.A"])
    assert list(graph.records) == ["ns.A", "ns.B"]


def test_parallel_matches_sequential(root, make_class):
    for i in range(30):
        hints = [f"@require(p.C{j})" for j in range(i + 1, min(i + 4, 30))]
        hints += [f"@use(p.C{(i * 7) % 30})", "@asset(p/img.png)"]
        make_class(root, f"p.C{i}", *hints)

    sequential = collect_deps_recursive([root], ["p.C0"])
    parallel = collect_deps_recursive([root], ["p.C0"], workers=4)

    assert list(parallel.records) == list(sequential.records)
    assert parallel.load == sequential.load
    assert parallel.use == sequential.use
    assert sort_deps_topologically(parallel) == sort_deps_topologically(sequential)


def test_cancel(root, make_class):
    make_class(root, "ns.Entry")
    cancel = threading.Event()
    cancel.set()
    builder = GraphBuilder([root], cancel=cancel)
    with pytest.raises(AnalysisCancelledError):
        builder.build(["ns.Entry"])


def test_deep_chain(root, make_class):
    depth = 1500
    for i in range(depth):
        hints = [f"@require(d.N{i + 1})"] if i + 1 < depth else []
        make_class(root, f"d.N{i}", *hints)

    graph = collect_deps_recursive([root], ["d.N0"])
    assert len(graph) == depth
    order = sort_deps_topologically(graph)
    assert order[0] == f"d.N{depth - 1}"
    assert order[-1] == "d.N0"


def test_cancel_checked_before_each_read(root, make_class, monkeypatch):
    make_class(root, "ns.A")
    make_class(root, "ns.B")
    cancel = threading.Event()
    builder = GraphBuilder([root], cancel=cancel)

    scanned = []
    scan = builder._scan
    add_edges = builder._add_edges

    def counting_scan(resolution):
        scanned.append(resolution.class_id)
        return scan(resolution)

    def add_edges_then_cancel(*args):
        add_edges(*args)
        cancel.set()

    monkeypatch.setattr(builder, "_scan", counting_scan)
    monkeypatch.setattr(builder, "_add_edges", add_edges_then_cancel)
    with pytest.raises(AnalysisCancelledError):
        builder.build(["ns.A", "ns.B"])
    assert scanned == ["ns.A"]


def test_alias_prefixing_its_own_target(root, make_class):
    make_class(root, "app.v2.Main", "@require(app.Util)")
    make_class(root, "app.v2.Util")

    graph = collect_deps_recursive([root], ["app.Main"], {"app": "app.v2"})

    assert graph.entry_ids == ["app.v2.Main"]
    assert list(graph.records) == ["app.v2.Main", "app.v2.Util"]
    assert graph.records["app.v2.Main"].file_path == root / "app" / "v2" / "Main.js"
    assert graph.load_edges("app.v2.Main") == ["app.v2.Util"]
    assert sort_deps_topologically(graph) == ["app.v2.Util", "app.v2.Main"]


@pytest.mark.parametrize("entry", [".", "ns..A", "9x.Y", ""])
def test_invalid_entry_ids(root, make_class, entry):
    make_class(root, "ns.A")
    with pytest.raises(ConfigError, match="invalid entry class id"):
        collect_deps_recursive([root], [entry])
