"""Invocation of the external collection runner."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import IO

from api_test_orchestrator.configuration.runtime_settings import RunConfig
from api_test_orchestrator.pipeline_errors import ToolMissingError
from api_test_orchestrator.reporting.artifact_store import Clock, allocate_artifact
from api_test_orchestrator.reporting.report_models import (
    HTML_REPORT,
    JSON_RESULTS,
    PERFORMANCE_REPORT,
    ArtifactKind,
    ArtifactNaming,
    ReportArtifact,
)

from .run_contracts import CommandOutput, RunResult

LOGGER = logging.getLogger(__name__)

CommandRunner = Callable[[tuple[str, ...]], CommandOutput]
OutputSink = Callable[[str], None]

_REPORT_NAMINGS: dict[str, tuple[ArtifactNaming, ...]] = {
    "detailed": (HTML_REPORT, JSON_RESULTS),
    "performance": (PERFORMANCE_REPORT,),
}


def build_base_command(config: RunConfig) -> list[str]:
    """Arguments shared by every runner invocation."""
    command = [
        config.runner_executable,
        "run",
        str(config.collection_file),
        "--environment",
        str(config.environment_file),
    ]
    if config.api_key:
        command.extend(["--env-var", f"API_KEY={config.api_key}"])
    return command


def build_runner_command(
    config: RunConfig, mode_name: str, reports: Sequence[ReportArtifact] = ()
) -> tuple[str, ...]:
    """Build the full argument vector for one run mode."""
    settings = config.mode_settings(mode_name)
    command = build_base_command(config)
    if settings.folder:
        command.extend(["--folder", settings.folder])
    command.extend(["--reporters", ",".join(settings.reporters)])
    for report in reports:
        if report.kind is ArtifactKind.HTML and "htmlextra" in settings.reporters:
            command.extend(["--reporter-htmlextra-export", str(report.path)])
        elif report.kind is ArtifactKind.JSON and "json" in settings.reporters:
            command.extend(["--reporter-json-export", str(report.path)])
    if settings.bail:
        command.append("--bail")
    command.extend(["--timeout", str(settings.timeout_ms)])
    if settings.delay_ms:
        command.extend(["--delay-request", str(settings.delay_ms)])
    return tuple(command)


def build_dry_run_command(config: RunConfig) -> tuple[str, ...]:
    """Arguments that parse the collection/environment pairing without issuing requests."""
    return (*build_base_command(config), "--dry-run")


class CollectionRunner:
    """Runs the external collection runner and wraps its exit status in a RunResult."""

    def __init__(
        self,
        config: RunConfig,
        *,
        command_runner: CommandRunner | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._command_runner = command_runner or run_subprocess
        self._clock = clock

    def run(self, mode_name: str) -> RunResult:
        """Execute one run mode; the runner's exit code is returned, never suppressed."""
        created_at = (self._clock or datetime.now)()
        reports = tuple(
            allocate_artifact(self._config, naming, clock=lambda: created_at)
            for naming in _REPORT_NAMINGS.get(mode_name, ())
        )
        command = build_runner_command(self._config, mode_name, reports)
        return self._execute(mode_name, command, reports)

    def dry_run(self) -> RunResult:
        return self._execute("dry-run", build_dry_run_command(self._config), ())

    def _execute(
        self, mode_name: str, command: tuple[str, ...], reports: tuple[ReportArtifact, ...]
    ) -> RunResult:
        LOGGER.debug("running %s: %s", mode_name, _redacted(command))
        output = self._command_runner(command)
        LOGGER.debug("%s finished with exit code %s", mode_name, output.exit_code)
        return RunResult(
            mode=mode_name,
            command=command,
            exit_code=output.exit_code,
            stdout=output.stdout,
            stderr=output.stderr,
            reports=reports,
        )


def run_subprocess(
    command: tuple[str, ...],
    *,
    on_stdout: OutputSink | None = None,
    on_stderr: OutputSink | None = None,
) -> CommandOutput:
    """Run one command to completion, streaming each output line to the sinks as it arrives.

    Output is decoded as UTF-8; undecodable bytes are replaced rather than raised.
    """
    try:
        process = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise ToolMissingError(f"Runner executable not found: {command[0]}") from exc

    with process, ThreadPoolExecutor(max_workers=1) as executor:
        stderr_future = executor.submit(_drain, process.stderr, on_stderr)
        stdout = _drain(process.stdout, on_stdout)
        stderr = stderr_future.result()
        exit_code = process.wait()
    return CommandOutput(exit_code=exit_code, stdout=stdout, stderr=stderr)


def _drain(stream: IO[str] | None, sink: OutputSink | None) -> str:
    if stream is None:
        return ""
    lines = []
    for line in stream:
        lines.append(line)
        if sink is not None:
            sink(line)
    return "".join(lines)



def _redacted(command: tuple[str, ...]) -> str:
    shown = [
        "API_KEY=***" if argument.startswith("API_KEY=") else argument for argument in command
    ]
    return shlex.join(shown)
