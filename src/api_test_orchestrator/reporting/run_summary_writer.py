"""Markdown summary written after detailed and full runs."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from api_test_orchestrator.configuration.runtime_settings import RunConfig

from .artifact_store import Clock, allocate_artifact
from .metrics_extraction import format_metrics
from .report_models import TEST_SUMMARY, ReportArtifact, RunMetrics

if TYPE_CHECKING:
    from api_test_orchestrator.run_execution.run_contracts import RunResult


def generate_summary(
    config: RunConfig,
    run_results: Sequence[RunResult] = (),
    metrics: RunMetrics | None = None,
    clock: Clock | None = None,
) -> ReportArtifact:
    """Write one summary artifact describing this invocation."""
    artifact = allocate_artifact(config, TEST_SUMMARY, clock=clock)
    artifact.path.parent.mkdir(parents=True, exist_ok=True)
    content = render_summary(
        config,
        run_results=run_results,
        metrics=metrics,
        generated_at=artifact.created_at.strftime("%a %b %d %H:%M:%S %Y"),
    )
    with artifact.path.open("x", encoding="utf-8") as handle:
        handle.write(content)
    return artifact


def render_summary(
    config: RunConfig,
    *,
    run_results: Sequence[RunResult],
    metrics: RunMetrics | None,
    generated_at: str,
) -> str:
    lines = [
        "# Test Execution Summary",
        "",
        f"**Date**: {generated_at}",
        f"**Collection**: {collection_display_name(config)}",
        f"**Environment**: {config.environment_file.stem}",
        "",
        "## Test Results",
        "",
        "### Collection Structure",
    ]
    lines.extend(f"- {category}" for category in config.summary.categories)
    lines.extend(["", "### Run Outcomes"])
    if run_results:
        for result in run_results:
            status = "passed" if result.succeeded else f"failed (exit code {result.exit_code})"
            lines.append(f"- {result.mode}: {status}")
    else:
        lines.append("- No runs recorded in this invocation")
    lines.extend(["", "### Key Metrics"])
    if metrics is not None:
        lines.extend(f"- {line}" for line in format_metrics(metrics))
    else:
        lines.append("- Total Requests: Available in detailed JSON reports")
    lines.append("")
    return "\n".join(lines)


def collection_display_name(config: RunConfig) -> str:
    """Collection name from configuration, the collection's info block or the file stem."""
    if config.summary.collection_name:
        return config.summary.collection_name
    name = _collection_info_name(config.collection_file)
    return name or config.collection_file.stem


def _collection_info_name(path: Path) -> str | None:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    info = document.get("info") if isinstance(document, dict) else None
    name = info.get("name") if isinstance(info, dict) else None
    return name if isinstance(name, str) and name.strip() else None
