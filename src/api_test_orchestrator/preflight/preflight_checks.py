"""Checks that must hold before the external runner is invoked."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

from api_test_orchestrator.configuration.runtime_settings import RunConfig
from api_test_orchestrator.findings import Finding
from api_test_orchestrator.pipeline_errors import FileMissingError, ToolMissingError

from .preflight_outcomes import PreflightResult

ExecutableLocator = Callable[[str], str | None]

INSTALL_HINT = "npm install -g newman"


def check_tool_present(config: RunConfig, which: ExecutableLocator | None = None) -> Path:
    """Resolve the runner executable on PATH or raise ToolMissingError."""
    locate = which or shutil.which
    resolved = locate(config.runner_executable)
    if resolved is None:
        raise ToolMissingError(
            f"{config.runner_executable} is not installed. Please run: {INSTALL_HINT}"
        )
    return Path(resolved)


def check_file_exists(path: Path, label: str) -> Path:
    """Raise FileMissingError when a required input file is absent."""
    if not path.is_file():
        raise FileMissingError(f"{label} file not found: {path}")
    return path


def check_credential(config: RunConfig) -> tuple[Finding, ...]:
    """Warn when no API key override is configured; the environment file may still carry one."""
    if config.api_key:
        return ()
    return (
        Finding.warning("API_KEY environment variable not set"),
        Finding.info("Please export your API key: export API_KEY=your_actual_api_key"),
        Finding.info("Or it will be read from the environment file"),
    )


def run_preflight(config: RunConfig, which: ExecutableLocator | None = None) -> PreflightResult:
    """Run all preflight checks in order, failing fast on fatal conditions."""
    check_tool_present(config, which=which)
    check_file_exists(config.collection_file, "Collection")
    check_file_exists(config.environment_file, "Environment")
    findings = check_credential(config)
    return PreflightResult(findings=findings)
