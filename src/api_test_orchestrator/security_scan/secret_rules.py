"""Regular-expression rules describing likely leaked secrets."""

from __future__ import annotations

import re
from dataclasses import dataclass

from api_test_orchestrator.findings import Severity


@dataclass(frozen=True)
class SecretRule:
    """One pattern searched for line by line in scanned files."""

    name: str
    pattern: re.Pattern[str]
    severity: Severity
    message: str


DEFAULT_SECRET_RULES: tuple[SecretRule, ...] = (
    SecretRule(
        name="secret-keyword",
        pattern=re.compile(r"\b(?:sk|pk)_|password|secret"),
        severity=Severity.WARNING,
        message="Potential secret found",
    ),
    SecretRule(
        name="hardcoded-api-key",
        # Full 32-char keys, plus copies missing at most four trailing chars.
        pattern=re.compile(r"appid.*?[0-9a-f]{28,}"),
        severity=Severity.WARNING,
        message="Potential hardcoded API key found",
    ),
)

PERMISSIVE_MODE_THRESHOLD = 0o644
