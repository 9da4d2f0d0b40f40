"""Reports directory management: naming, listing and retention pruning."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from pathlib import Path

from api_test_orchestrator.configuration.runtime_settings import RunConfig

from .report_models import (
    ARTIFACT_NAMINGS,
    RETENTION_COUNTS,
    TIMESTAMP_FORMAT,
    ArtifactKind,
    ArtifactNaming,
    ReportArtifact,
)

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_ARTIFACT_NAME_PATTERN = re.compile(r"^(?P<prefix>.+)_(?P<timestamp>\d{8}_\d{6})(?P<ext>\.\w+)$")


def setup_reports(config: RunConfig) -> Path:
    """Create the reports directory; succeeds whether or not it already exists."""
    config.reports_dir.mkdir(parents=True, exist_ok=True)
    return config.reports_dir


def allocate_artifact(
    config: RunConfig, naming: ArtifactNaming, clock: Clock | None = None
) -> ReportArtifact:
    """Return a timestamped artifact path that does not collide with an existing file."""
    created_at = (clock or datetime.now)().replace(microsecond=0)
    path = _artifact_path(config.reports_dir, naming, created_at)
    while path.exists():
        created_at += timedelta(seconds=1)
        path = _artifact_path(config.reports_dir, naming, created_at)
    LOGGER.debug("allocated %s artifact %s", naming.kind.value, path)
    return ReportArtifact(path=path, kind=naming.kind, created_at=created_at)


def parse_artifact(path: Path) -> ReportArtifact | None:
    """Recognize a report file by its name; unrelated files yield None."""
    match = _ARTIFACT_NAME_PATTERN.match(path.name)
    if match is None:
        return None
    naming = _naming_for(match.group("prefix"), match.group("ext"))
    if naming is None:
        return None
    try:
        created_at = datetime.strptime(match.group("timestamp"), TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return ReportArtifact(path=path, kind=naming.kind, created_at=created_at)


def list_artifacts(reports_dir: Path, kind: ArtifactKind | None = None) -> list[ReportArtifact]:
    """List recognized artifacts, newest first."""
    if not reports_dir.is_dir():
        return []
    artifacts = []
    for candidate in reports_dir.iterdir():
        if not candidate.is_file():
            continue
        artifact = parse_artifact(candidate)
        if artifact is None or (kind is not None and artifact.kind is not kind):
            continue
        artifacts.append(artifact)
    return sorted(artifacts, key=lambda item: (item.created_at, item.path.name), reverse=True)


def prune_reports(
    config: RunConfig, retention: Mapping[ArtifactKind, int] | None = None
) -> tuple[Path, ...]:
    """Keep the newest N artifacts of each kind and delete the rest."""
    counts = RETENTION_COUNTS if retention is None else retention
    removed: list[Path] = []
    for kind, keep in counts.items():
        for artifact in list_artifacts(config.reports_dir, kind)[max(keep, 0) :]:
            artifact.path.unlink(missing_ok=True)
            LOGGER.debug("pruned %s artifact %s", kind.value, artifact.path)
            removed.append(artifact.path)
    return tuple(removed)


def _artifact_path(reports_dir: Path, naming: ArtifactNaming, created_at: datetime) -> Path:
    return reports_dir / f"{naming.prefix}_{created_at.strftime(TIMESTAMP_FORMAT)}{naming.extension}"


def _naming_for(prefix: str, extension: str) -> ArtifactNaming | None:
    for naming in ARTIFACT_NAMINGS:
        if naming.prefix == prefix and naming.extension == extension:
            return naming
    return None
