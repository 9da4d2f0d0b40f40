"""Preflight domain entities."""

from __future__ import annotations

from dataclasses import dataclass

from api_test_orchestrator.findings import Finding, Severity


@dataclass(frozen=True)
class PreflightResult:
    """Advisory findings of a preflight that passed; fatal failures are raised instead."""

    findings: tuple[Finding, ...]

    @property
    def warnings(self) -> tuple[Finding, ...]:
        return tuple(item for item in self.findings if item.severity is Severity.WARNING)
