"""Preflight domain exports."""

from .preflight_checks import (
    ExecutableLocator,
    check_credential,
    check_file_exists,
    check_tool_present,
    run_preflight,
)
from .preflight_outcomes import PreflightResult

__all__ = [
    "ExecutableLocator",
    "PreflightResult",
    "check_credential",
    "check_file_exists",
    "check_tool_present",
    "run_preflight",
]
