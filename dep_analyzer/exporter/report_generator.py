"""Generate the JSON analysis report."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from dep_analyzer.models import AnalysisResult, AnalyzerConfig


def build_report(result: AnalysisResult, config: AnalyzerConfig | None = None) -> dict:
    report = {
        "version": "1.0",
        "generated": datetime.now().isoformat(),
        "total_classes": len(result.graph),
    }
    if config is not None:
        report["root_paths"] = [str(r) for r in config.root_paths]
        report["namespace_map"] = dict(config.namespace_map)
        report["edge_kind"] = config.edge_kind
    report.update(result.to_dict())
    return report


def generate_report(
    result: AnalysisResult,
    output_path: Path,
    config: AnalyzerConfig | None = None,
) -> Path:
    """Write the report to ``output_path``, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(build_report(result, config), indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path
