"""Summary metrics read from machine-readable runner reports."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from api_test_orchestrator.findings import Finding

from .report_models import MetricsExtraction, RunMetrics


def extract_metrics(json_report_path: Path | str) -> MetricsExtraction:
    """Read mean/max response time and request count from a JSON runner report.

    A missing or unreadable report degrades to a warning rather than failing the run.
    """
    path = Path(json_report_path)
    if not path.is_file():
        return MetricsExtraction(
            metrics=None,
            findings=(Finding.warning("Performance report was not produced", source=path),),
        )
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        return MetricsExtraction(
            metrics=None,
            findings=(Finding.warning(f"Could not parse report metrics: {exc}", source=path),),
        )

    stats = _lookup(document, ("run", "stats"))
    metrics = RunMetrics(
        mean_response_ms=_lookup(stats, ("responseTime", "mean")),
        max_response_ms=_lookup(stats, ("responseTime", "max")),
        total_requests=_lookup(stats, ("requests", "total")),
    )
    findings: tuple[Finding, ...] = ()
    if metrics == RunMetrics(None, None, None):
        findings = (Finding.warning("Report does not contain run statistics", source=path),)
    return MetricsExtraction(metrics=metrics, findings=findings)


def format_metrics(metrics: RunMetrics) -> tuple[str, ...]:
    return (
        f"Average response time: {_display(metrics.mean_response_ms)}ms",
        f"Max response time: {_display(metrics.max_response_ms)}ms",
        f"Total requests: {_display(metrics.total_requests)}",
    )


def _lookup(document: Any, keys: tuple[str, ...]) -> Any:
    current = document
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _display(value: Any) -> str:
    return "null" if value is None else str(value)
