"""Reporting domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from api_test_orchestrator.findings import Finding

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class ArtifactKind(str, Enum):
    """Report artifact kinds subject to separate retention counts."""

    HTML = "html"
    JSON = "json"
    SUMMARY = "summary"


@dataclass(frozen=True)
class ArtifactNaming:
    """Filename prefix and extension of one artifact family."""

    prefix: str
    kind: ArtifactKind
    extension: str


HTML_REPORT = ArtifactNaming(prefix="api-test-report", kind=ArtifactKind.HTML, extension=".html")
JSON_RESULTS = ArtifactNaming(prefix="api-test-results", kind=ArtifactKind.JSON, extension=".json")
PERFORMANCE_REPORT = ArtifactNaming(
    prefix="performance_report", kind=ArtifactKind.JSON, extension=".json"
)
TEST_SUMMARY = ArtifactNaming(prefix="test_summary", kind=ArtifactKind.SUMMARY, extension=".md")

ARTIFACT_NAMINGS = (HTML_REPORT, JSON_RESULTS, PERFORMANCE_REPORT, TEST_SUMMARY)

RETENTION_COUNTS: Mapping[ArtifactKind, int] = {
    ArtifactKind.HTML: 10,
    ArtifactKind.JSON: 10,
    ArtifactKind.SUMMARY: 5,
}


@dataclass(frozen=True)
class ReportArtifact:
    """A report file tagged with its kind and the timestamp embedded in its name."""

    path: Path
    kind: ArtifactKind
    created_at: datetime

    @property
    def timestamp_label(self) -> str:
        return self.created_at.strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class RunMetrics:
    """Summary statistics read from a machine-readable runner report."""

    mean_response_ms: float | None
    max_response_ms: float | None
    total_requests: int | None


@dataclass(frozen=True)
class MetricsExtraction:
    """Metrics read from a report, or the warnings explaining why none are available."""

    metrics: RunMetrics | None
    findings: tuple[Finding, ...] = ()
