"""Advisory scan of collaborator files for secrets and loose permissions."""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from api_test_orchestrator.findings import Finding, Severity

from .secret_rules import DEFAULT_SECRET_RULES, PERMISSIVE_MODE_THRESHOLD, SecretRule

LOGGER = logging.getLogger(__name__)


class ScanStatus(str, Enum):
    """Overall result of a scan."""

    PASSED = "passed"
    WARNINGS = "warnings"


@dataclass(frozen=True)
class ScanReport:
    """Findings collected across all scanned files."""

    findings: tuple[Finding, ...]

    @property
    def status(self) -> ScanStatus:
        if any(item.severity is not Severity.INFO for item in self.findings):
            return ScanStatus.WARNINGS
        return ScanStatus.PASSED


def scan_files(
    paths: Iterable[Path], rules: Sequence[SecretRule] = DEFAULT_SECRET_RULES
) -> ScanReport:
    """Scan every path with every rule; never raises for unreadable or missing files."""
    findings: list[Finding] = []
    for path in paths:
        if not path.is_file():
            findings.append(Finding.warning("File not found, skipped by security scan", path))
            continue
        findings.extend(scan_text(path, rules))
        findings.extend(check_permissions(path))
    return ScanReport(findings=tuple(findings))


def scan_text(path: Path, rules: Sequence[SecretRule] = DEFAULT_SECRET_RULES) -> list[Finding]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        return [Finding.warning(f"Could not read file: {exc}", path)]

    findings = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        for rule in rules:
            if rule.pattern.search(line):
                LOGGER.debug("rule %s matched %s:%s", rule.name, path, line_number)
                findings.append(
                    Finding(
                        severity=rule.severity,
                        message=rule.message,
                        source=path,
                        line_number=line_number,
                    )
                )
    return findings


def check_permissions(path: Path, threshold: int = PERMISSIVE_MODE_THRESHOLD) -> list[Finding]:
    """Flag files whose permission bits exceed the threshold (rw-r--r-- by default)."""
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except OSError as exc:
        return [Finding.warning(f"Could not read file permissions: {exc}", path)]
    if mode & ~threshold:
        return [
            Finding.warning(f"File has overly permissive permissions ({mode:o})", source=path)
        ]
    return []
