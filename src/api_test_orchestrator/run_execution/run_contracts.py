"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from api_test_orchestrator.reporting.report_models import ArtifactKind, ReportArtifact


class RunMode(str, Enum):
    """Actions selectable from the command line."""

    BASIC = "basic"
    DETAILED = "detailed"
    PERFORMANCE = "performance"
    SMOKE = "smoke"
    VALIDATE = "validate"
    SECURITY = "security"
    FULL = "full"
    CLEAN = "clean"
    HELP = "help"

    @classmethod
    def from_token(cls, token: str | None) -> RunMode:
        """Map a command-line token to a mode; unknown or missing tokens fall back to help."""
        if token is None:
            return cls.HELP
        normalized = token.strip().lower()
        normalized = _MODE_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return cls.HELP


_MODE_ALIASES = {"report": "detailed", "perf": "performance"}


@dataclass(frozen=True)
class CommandOutput:
    """Exit status and captured streams of one external process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""


@dataclass(frozen=True)
class RunResult:
    """Typed outcome of one external runner invocation."""

    mode: str
    command: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str
    reports: tuple[ReportArtifact, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def report_of(self, kind: ArtifactKind) -> ReportArtifact | None:
        return next((report for report in self.reports if report.kind is kind), None)
