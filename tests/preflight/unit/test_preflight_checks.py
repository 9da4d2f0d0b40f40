"""Preflight checker tests."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest
from api_test_orchestrator.configuration import RunConfig, default_run_config
from api_test_orchestrator.findings import Severity
from api_test_orchestrator.pipeline_errors import FileMissingError, ToolMissingError
from api_test_orchestrator.preflight import (
    check_credential,
    check_file_exists,
    check_tool_present,
    run_preflight,
)


def _config(tmp_path: Path, *, api_key: str | None = None, create: bool = True) -> RunConfig:
    collection = tmp_path / "collection.json"
    environment = tmp_path / "environment.json"
    if create:
        collection.write_text("{}", encoding="utf-8")
        environment.write_text("{}", encoding="utf-8")
    return replace(
        default_run_config(),
        collection_file=collection,
        environment_file=environment,
        reports_dir=tmp_path / "reports",
        api_key=api_key,
    )


def _found(name: str) -> str:
    return f"/usr/local/bin/{name}"


def _not_found(_name: str) -> None:
    return None


def test_check_tool_present_returns_resolved_path(tmp_path: Path) -> None:
    assert check_tool_present(_config(tmp_path), which=_found) == Path("/usr/local/bin/newman")


def test_check_tool_present_raises_with_install_hint(tmp_path: Path) -> None:
    with pytest.raises(ToolMissingError, match="npm install -g newman"):
        check_tool_present(_config(tmp_path), which=_not_found)


def test_check_file_exists_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileMissingError, match="Collection file not found"):
        check_file_exists(tmp_path / "missing.json", "Collection")


def test_check_file_exists_rejects_directories(tmp_path: Path) -> None:
    with pytest.raises(FileMissingError):
        check_file_exists(tmp_path, "Environment")


def test_check_credential_warns_when_api_key_absent(tmp_path: Path) -> None:
    findings = check_credential(_config(tmp_path))

    assert findings[0].severity is Severity.WARNING
    assert "API_KEY" in findings[0].message


def test_check_credential_is_silent_when_api_key_present(tmp_path: Path) -> None:
    assert check_credential(_config(tmp_path, api_key="abc")) == ()


@pytest.mark.parametrize("api_key", [None, "abc"])
@pytest.mark.parametrize("missing", ["collection.json", "environment.json"])
def test_run_preflight_fails_for_missing_input_regardless_of_credential(
    tmp_path: Path, api_key: str | None, missing: str
) -> None:
    config = _config(tmp_path, api_key=api_key)
    (tmp_path / missing).unlink()

    with pytest.raises(FileMissingError):
        run_preflight(config, which=_found)


def test_run_preflight_passes_with_credential_warning(tmp_path: Path) -> None:
    result = run_preflight(_config(tmp_path), which=_found)

    assert len(result.warnings) == 1
    assert not hasattr(result, "passed")


def test_run_preflight_checks_tool_before_files(tmp_path: Path) -> None:
    with pytest.raises(ToolMissingError):
        run_preflight(_config(tmp_path, create=False), which=_not_found)
