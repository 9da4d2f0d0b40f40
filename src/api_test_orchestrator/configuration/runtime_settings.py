"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_COLLECTION_FILE = Path("collection/openweathermap-collection.json")
DEFAULT_ENVIRONMENT_FILE = Path("environment/openweather-environment.json")
DEFAULT_REPORTS_DIR = Path("reports")
DEFAULT_RUNNER_EXECUTABLE = "newman"
DEFAULT_SMOKE_FOLDER = "Health Check"
DEFAULT_SUMMARY_CATEGORIES = (
    "Health Check Tests",
    "Current Weather API Tests",
    "Geocoding Tests",
    "Error Handling Tests",
    "Performance Tests",
)


@dataclass(frozen=True)
class ModeSettings:
    """Runner flags applied for one run mode."""

    reporters: tuple[str, ...]
    timeout_ms: int
    delay_ms: int | None = None
    bail: bool = False
    folder: str | None = None


DEFAULT_MODE_SETTINGS: Mapping[str, ModeSettings] = {
    "basic": ModeSettings(reporters=("cli",), timeout_ms=30000, bail=True),
    "detailed": ModeSettings(reporters=("cli", "htmlextra", "json"), timeout_ms=30000),
    "performance": ModeSettings(reporters=("json",), timeout_ms=10000, delay_ms=100),
    "smoke": ModeSettings(reporters=("cli",), timeout_ms=15000, bail=True),
}


@dataclass(frozen=True)
class SummarySettings:
    """Content of the generated Markdown summary."""

    categories: tuple[str, ...] = DEFAULT_SUMMARY_CATEGORIES
    collection_name: str | None = None


@dataclass(frozen=True)
class RunConfig:  # pylint: disable=too-many-instance-attributes
    """Settings resolved once per invocation and never mutated afterwards."""

    collection_file: Path
    environment_file: Path
    reports_dir: Path
    api_key: str | None
    runner_executable: str
    smoke_folder: str
    modes: Mapping[str, ModeSettings]
    summary: SummarySettings
    source_path: Path | None = None

    def mode_settings(self, mode_name: str) -> ModeSettings:
        """Return runner flags for a mode, with the smoke folder filter applied."""
        try:
            settings = self.modes[mode_name]
        except KeyError as exc:
            raise KeyError(f"No runner settings for mode '{mode_name}'.") from exc
        if mode_name == "smoke" and settings.folder is None:
            return ModeSettings(
                reporters=settings.reporters,
                timeout_ms=settings.timeout_ms,
                delay_ms=settings.delay_ms,
                bail=settings.bail,
                folder=self.smoke_folder,
            )
        return settings
