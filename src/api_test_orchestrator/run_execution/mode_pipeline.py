"""Per-mode step sequencing, including the aggregated `full` run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from api_test_orchestrator.configuration.runtime_settings import RunConfig
from api_test_orchestrator.console_output import Console
from api_test_orchestrator.pipeline_errors import RunFailedError
from api_test_orchestrator.preflight import ExecutableLocator, run_preflight
from api_test_orchestrator.reporting import (
    ArtifactKind,
    RunMetrics,
    extract_metrics,
    format_metrics,
    generate_summary,
    prune_reports,
    setup_reports,
)
from api_test_orchestrator.reporting.artifact_store import Clock
from api_test_orchestrator.security_scan import ScanReport, ScanStatus, scan_files
from api_test_orchestrator.validation import validate_files

from .collection_runner import CollectionRunner, CommandRunner, run_subprocess
from .run_contracts import RunMode, RunResult

LOGGER = logging.getLogger(__name__)


class ModePipeline:
    """Runs the steps of one run mode in order against a fixed configuration."""

    def __init__(
        self,
        config: RunConfig,
        *,
        console: Console | None = None,
        command_runner: CommandRunner | None = None,
        which: ExecutableLocator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._console = console or Console()
        self._which = which
        self._clock = clock
        self._runner = CollectionRunner(
            config,
            command_runner=command_runner
            or partial(
                run_subprocess,
                on_stdout=self._console.runner_output,
                on_stderr=self._console.runner_error,
            ),
            clock=clock,
        )
        self._steps: dict[RunMode, Callable[[], list[RunResult]]] = {
            RunMode.BASIC: self._basic,
            RunMode.DETAILED: self._detailed,
            RunMode.PERFORMANCE: self._performance,
            RunMode.SMOKE: self._smoke,
            RunMode.VALIDATE: self._validate,
            RunMode.SECURITY: self._security,
            RunMode.FULL: self._full,
            RunMode.CLEAN: self._clean,
        }

    def execute(self, mode: RunMode) -> list[RunResult]:
        """Execute a mode and return the runner results it produced.

        Raises:
          OrchestrationError: When a fatal step fails or, after all follow-up steps
            have completed, when any runner invocation exited non-zero.
        """
        if mode not in self._steps:
            raise ValueError(f"Mode '{mode.value}' has no pipeline steps.")
        LOGGER.debug("executing mode %s", mode.value)
        results = self._steps[mode]()
        _raise_for_first_failure(results)
        return results

    def _basic(self) -> list[RunResult]:
        self.preflight()
        self.setup()
        return [self._run_tests("basic", "Running basic API tests...", "Basic tests completed")]

    def _detailed(self) -> list[RunResult]:
        self.preflight()
        self.setup()
        results = [self._run_detailed()]
        self.summary(results)
        return results

    def _performance(self) -> list[RunResult]:
        self.preflight()
        self.setup()
        return [self._run_performance()]

    def _smoke(self) -> list[RunResult]:
        self.preflight()
        self.setup()
        return [self._run_tests("smoke", "Running smoke tests...", "Smoke tests completed")]

    def _validate(self) -> list[RunResult]:
        self.validate()
        return []

    def _security(self) -> list[RunResult]:
        self.security_scan()
        return []

    def _full(self) -> list[RunResult]:
        self.preflight()
        self.setup()
        self.validate()
        self.security_scan()
        results = [self._run_detailed(), self._run_performance()]
        self.summary(results)
        self.clean()
        return results

    def _clean(self) -> list[RunResult]:
        self.clean()
        return []

    def preflight(self) -> None:
        self._console.status("Checking prerequisites...")
        result = run_preflight(self._config, which=self._which)
        self._console.findings(result.findings)
        self._console.success("All prerequisites met")

    def setup(self) -> None:
        self._console.status("Setting up reports directory...")
        setup_reports(self._config)
        self._console.success("Reports directory ready")

    def validate(self) -> None:
        self._console.status("Validating collection and environment files...")
        self._console.findings(validate_files(self._config, self._runner))
        self._console.success("Files validation passed")

    def security_scan(self) -> ScanReport:
        self._console.status("Running security scan...")
        report = scan_files((self._config.collection_file, self._config.environment_file))
        self._console.findings(report.findings)
        if report.status is ScanStatus.PASSED:
            self._console.success("Security scan passed - no issues found")
        else:
            self._console.warning("Security scan completed with warnings")
        return report

    def summary(self, results: list[RunResult]) -> None:
        self._console.status("Generating test summary...")
        metrics = _metrics_from_results(results)
        artifact = generate_summary(self._config, results, metrics=metrics, clock=self._clock)
        self._console.success(f"Test summary generated: {artifact.path}")

    def clean(self) -> None:
        self._console.status("Cleaning old report files...")
        removed = prune_reports(self._config)
        LOGGER.debug("removed %d report files", len(removed))
        self._console.success("Old reports cleaned")

    def _run_tests(self, mode_name: str, start_message: str, done_message: str) -> RunResult:
        self._console.status(start_message)
        result = self._invoke(mode_name)
        if result.succeeded:
            self._console.success(done_message)
        return result

    def _run_detailed(self) -> RunResult:
        self._console.status("Running tests with detailed reporting...")
        result = self._invoke("detailed")
        if result.succeeded:
            self._console.success("Detailed reports generated:")
        for report in result.reports:
            label = "HTML" if report.kind is ArtifactKind.HTML else "JSON"
            self._console.detail(f"  {label}: {report.path}")
        return result

    def _run_performance(self) -> RunResult:
        self._console.status("Running performance-focused tests...")
        result = self._invoke("performance")
        report = result.report_of(ArtifactKind.JSON)
        if report is not None and report.path.is_file():
            self._console.success("Performance test completed")
            extraction = extract_metrics(report.path)
            self._console.findings(extraction.findings)
            if extraction.metrics is not None:
                self._console.detail("Performance metrics:")
                for line in format_metrics(extraction.metrics):
                    self._console.detail(f"  {line}")
        return result

    def _invoke(self, mode_name: str) -> RunResult:
        result = self._runner.run(mode_name)
        if not result.succeeded:
            self._console.error(f"{mode_name} run failed with exit code {result.exit_code}")
        return result


def _metrics_from_results(results: list[RunResult]) -> RunMetrics | None:
    for result in results:
        report = result.report_of(ArtifactKind.JSON)
        if report is None or not report.path.is_file():
            continue
        extraction = extract_metrics(report.path)
        if extraction.metrics is not None:
            return extraction.metrics
    return None


def _raise_for_first_failure(results: list[RunResult]) -> None:
    for result in results:
        if not result.succeeded:
            raise RunFailedError(
                f"{result.mode} run failed with exit code {result.exit_code}",
                exit_code=result.exit_code,
            )
