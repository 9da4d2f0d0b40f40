"""Non-fatal findings reported by advisory checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """Severity of an advisory finding."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Finding:
    """One human-readable observation produced by a check."""

    severity: Severity
    message: str
    source: Path | None = None
    line_number: int | None = None

    @staticmethod
    def warning(message: str, source: Path | None = None) -> Finding:
        return Finding(severity=Severity.WARNING, message=message, source=source)

    @staticmethod
    def info(message: str, source: Path | None = None) -> Finding:
        return Finding(severity=Severity.INFO, message=message, source=source)

    def render(self) -> str:
        if self.source is None:
            return self.message
        location = str(self.source)
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        return f"{self.message} ({location})"
