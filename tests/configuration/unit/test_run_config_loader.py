"""Run configuration loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from api_test_orchestrator.configuration import ConfigurationError, load_run_config


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_defaults_apply_without_file_or_environment() -> None:
    config = load_run_config(environ={})

    assert config.collection_file == Path("collection/openweathermap-collection.json")
    assert config.environment_file == Path("environment/openweather-environment.json")
    assert config.reports_dir == Path("reports")
    assert config.api_key is None
    assert config.runner_executable == "newman"
    assert config.mode_settings("basic").timeout_ms == 30000
    assert config.mode_settings("basic").bail is True
    assert config.mode_settings("performance").delay_ms == 100
    assert config.mode_settings("smoke").folder == "Health Check"


def test_environment_overrides_paths_runner_and_api_key() -> None:
    config = load_run_config(
        environ={
            "API_KEY": "  key-123  ",
            "COLLECTION_FILE": "c.json",
            "ENVIRONMENT_FILE": "e.json",
            "REPORTS_DIR": "out",
            "COLLECTION_RUNNER": "/opt/newman",
        }
    )

    assert config.api_key == "key-123"
    assert config.collection_file == Path("c.json")
    assert config.environment_file == Path("e.json")
    assert config.reports_dir == Path("out")
    assert config.runner_executable == "/opt/newman"


def test_blank_api_key_is_treated_as_absent() -> None:
    config = load_run_config(environ={"API_KEY": "   "})

    assert config.api_key is None


def test_yaml_file_overrides_modes_summary_and_resolves_relative_paths(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "orchestrator.yaml",
        """
collection: suites/weather.json
environment: suites/env.json
reports_dir: out
runner:
  executable: newman-beta
  smoke_folder: Critical Path
modes:
  performance:
    timeout_ms: 5000
    delay_ms: 250
summary:
  categories:
    - Health
    - Errors
""",
    )

    config = load_run_config(config_path, environ={})

    assert config.collection_file == (tmp_path / "suites" / "weather.json").resolve()
    assert config.environment_file == (tmp_path / "suites" / "env.json").resolve()
    assert config.reports_dir == (tmp_path / "out").resolve()
    assert config.runner_executable == "newman-beta"
    assert config.mode_settings("smoke").folder == "Critical Path"
    assert config.mode_settings("performance").timeout_ms == 5000
    assert config.mode_settings("performance").delay_ms == 250
    assert config.mode_settings("detailed").timeout_ms == 30000
    assert config.summary.categories == ("Health", "Errors")
    assert config.source_path == config_path.resolve()


def test_environment_takes_precedence_over_yaml_file(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "reports_dir: from-file\n")

    config = load_run_config(config_path, environ={"REPORTS_DIR": "from-env"})

    assert config.reports_dir == Path("from-env")


def test_empty_yaml_file_keeps_defaults(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "")

    config = load_run_config(config_path, environ={})

    assert config.runner_executable == "newman"


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_run_config(tmp_path / "absent.yaml", environ={})


def test_unknown_mode_section_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "modes:\n  turbo:\n    timeout_ms: 1\n")

    with pytest.raises(ConfigurationError, match="modes.turbo"):
        load_run_config(config_path, environ={})


def test_non_positive_timeout_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "modes:\n  basic:\n    timeout_ms: 0\n")

    with pytest.raises(ConfigurationError, match="modes.basic.timeout_ms"):
        load_run_config(config_path, environ={})


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_run_config(config_path, environ={})


def test_mode_settings_cannot_be_mutated() -> None:
    config = load_run_config(environ={})

    with pytest.raises(TypeError):
        config.modes["basic"] = config.modes["smoke"]  # type: ignore[index]
