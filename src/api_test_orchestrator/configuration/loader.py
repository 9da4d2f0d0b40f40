"""Run configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from api_test_orchestrator.pipeline_errors import ConfigurationError

from .runtime_settings import (
    DEFAULT_COLLECTION_FILE,
    DEFAULT_ENVIRONMENT_FILE,
    DEFAULT_MODE_SETTINGS,
    DEFAULT_REPORTS_DIR,
    DEFAULT_RUNNER_EXECUTABLE,
    DEFAULT_SMOKE_FOLDER,
    ModeSettings,
    RunConfig,
    SummarySettings,
)

ENV_API_KEY = "API_KEY"
ENV_COLLECTION_FILE = "COLLECTION_FILE"
ENV_ENVIRONMENT_FILE = "ENVIRONMENT_FILE"
ENV_REPORTS_DIR = "REPORTS_DIR"
ENV_RUNNER = "COLLECTION_RUNNER"


def load_run_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    """Build the run configuration from defaults, an optional YAML file and the environment."""
    environment = os.environ if environ is None else environ
    config = default_run_config()
    if config_path is not None:
        config = _apply_file(config, Path(config_path))
    return _apply_environment(config, environment)


def default_run_config() -> RunConfig:
    return RunConfig(
        collection_file=DEFAULT_COLLECTION_FILE,
        environment_file=DEFAULT_ENVIRONMENT_FILE,
        reports_dir=DEFAULT_REPORTS_DIR,
        api_key=None,
        runner_executable=DEFAULT_RUNNER_EXECUTABLE,
        smoke_folder=DEFAULT_SMOKE_FOLDER,
        modes=MappingProxyType(dict(DEFAULT_MODE_SETTINGS)),
        summary=SummarySettings(),
    )


def _apply_file(config: RunConfig, path: Path) -> RunConfig:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    runner = _optional_mapping(parsed.get("runner"), "runner")
    return replace(
        config,
        collection_file=_optional_path(
            parsed.get("collection"), "collection", base_path, config.collection_file
        ),
        environment_file=_optional_path(
            parsed.get("environment"), "environment", base_path, config.environment_file
        ),
        reports_dir=_optional_path(
            parsed.get("reports_dir"), "reports_dir", base_path, config.reports_dir
        ),
        runner_executable=_optional_string(
            runner.get("executable"), "runner.executable", config.runner_executable
        ),
        smoke_folder=_optional_string(
            runner.get("smoke_folder"), "runner.smoke_folder", config.smoke_folder
        ),
        modes=_parse_modes_section(parsed.get("modes"), config.modes),
        summary=_parse_summary_section(parsed.get("summary"), config.summary),
        source_path=path.resolve(),
    )


def _apply_environment(config: RunConfig, environ: Mapping[str, str]) -> RunConfig:
    api_key = environ.get(ENV_API_KEY, "").strip() or None
    collection = environ.get(ENV_COLLECTION_FILE, "").strip()
    environment_file = environ.get(ENV_ENVIRONMENT_FILE, "").strip()
    reports_dir = environ.get(ENV_REPORTS_DIR, "").strip()
    runner = environ.get(ENV_RUNNER, "").strip()
    return replace(
        config,
        api_key=api_key,
        collection_file=Path(collection) if collection else config.collection_file,
        environment_file=Path(environment_file) if environment_file else config.environment_file,
        reports_dir=Path(reports_dir) if reports_dir else config.reports_dir,
        runner_executable=runner or config.runner_executable,
    )


def _parse_modes_section(
    value: Any, defaults: Mapping[str, ModeSettings]
) -> Mapping[str, ModeSettings]:
    section = _optional_mapping(value, "modes")
    modes = dict(defaults)
    for mode_name, raw_settings in section.items():
        if mode_name not in defaults:
            raise ConfigurationError(
                f"modes.{mode_name} is not a runner mode; expected one of: "
                + ", ".join(sorted(defaults))
            )
        settings = _optional_mapping(raw_settings, f"modes.{mode_name}")
        base = defaults[mode_name]
        modes[mode_name] = ModeSettings(
            reporters=base.reporters,
            timeout_ms=_positive_int(
                settings.get("timeout_ms", base.timeout_ms), f"modes.{mode_name}.timeout_ms"
            ),
            delay_ms=_optional_positive_int(
                settings.get("delay_ms", base.delay_ms), f"modes.{mode_name}.delay_ms"
            ),
            bail=bool(settings.get("bail", base.bail)),
            folder=_optional_string(
                settings.get("folder"), f"modes.{mode_name}.folder", base.folder
            ),
        )
    return MappingProxyType(modes)


def _parse_summary_section(value: Any, defaults: SummarySettings) -> SummarySettings:
    section = _optional_mapping(value, "summary")
    categories = section.get("categories")
    if categories is None:
        resolved_categories = defaults.categories
    elif isinstance(categories, list) and all(isinstance(item, str) for item in categories):
        resolved_categories = tuple(item.strip() for item in categories if item.strip())
    else:
        raise ConfigurationError("summary.categories must be a list of strings.")
    return SummarySettings(
        categories=resolved_categories,
        collection_name=_optional_string(
            section.get("collection_name"), "summary.collection_name", defaults.collection_name
        ),
    )


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_path(value: Any, field_name: str, base_path: Path, default: Path) -> Path:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{field_name} must be a non-empty string.")
    candidate = Path(value.strip())
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_string(value: Any, field_name: str, default: str | None) -> Any:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value.strip() or default


def _positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _optional_positive_int(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    return _positive_int(value, field_name)
