"""dep-analyzer: class dependency analysis for bundling builds."""

from dep_analyzer.analysis import (
    collect_deps_recursive,
    create_at_hints_index,
    find_cycles,
    sort_deps_topologically,
    translate_class_ids_to_paths,
)
from dep_analyzer.errors import (
    AnalysisCancelledError,
    ConfigError,
    CyclicDependencyError,
    DepAnalyzerError,
    DuplicateClassIdWarning,
    HintParseError,
    InternalInvariantError,
    UnresolvedDependencyError,
)
from dep_analyzer.models import (
    AnalysisResult,
    AnalyzerConfig,
    ClassRecord,
    DependencyGraph,
    Hint,
    HintKind,
)
from dep_analyzer.pipeline import run_analysis
from dep_analyzer.resolver import Resolver, resolve

__version__ = "0.1.0"

__all__ = [
    "AnalysisCancelledError",
    "AnalysisResult",
    "AnalyzerConfig",
    "ClassRecord",
    "ConfigError",
    "CyclicDependencyError",
    "DepAnalyzerError",
    "DependencyGraph",
    "DuplicateClassIdWarning",
    "Hint",
    "HintKind",
    "HintParseError",
    "InternalInvariantError",
    "Resolver",
    "UnresolvedDependencyError",
    "collect_deps_recursive",
    "create_at_hints_index",
    "find_cycles",
    "resolve",
    "run_analysis",
    "sort_deps_topologically",
    "translate_class_ids_to_paths",
]
