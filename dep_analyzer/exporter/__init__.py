"""Exporter layer."""

from dep_analyzer.exporter.report_generator import build_report, generate_report

__all__ = ["build_report", "generate_report"]
