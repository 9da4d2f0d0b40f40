"""Reporting domain exports."""

from .artifact_store import (
    allocate_artifact,
    list_artifacts,
    parse_artifact,
    prune_reports,
    setup_reports,
)
from .metrics_extraction import extract_metrics, format_metrics
from .report_models import (
    HTML_REPORT,
    JSON_RESULTS,
    PERFORMANCE_REPORT,
    RETENTION_COUNTS,
    TEST_SUMMARY,
    ArtifactKind,
    MetricsExtraction,
    ReportArtifact,
    RunMetrics,
)
from .run_summary_writer import generate_summary

__all__ = [
    "ArtifactKind",
    "HTML_REPORT",
    "JSON_RESULTS",
    "MetricsExtraction",
    "PERFORMANCE_REPORT",
    "RETENTION_COUNTS",
    "ReportArtifact",
    "RunMetrics",
    "TEST_SUMMARY",
    "allocate_artifact",
    "extract_metrics",
    "format_metrics",
    "generate_summary",
    "list_artifacts",
    "parse_artifact",
    "prune_reports",
    "setup_reports",
]
