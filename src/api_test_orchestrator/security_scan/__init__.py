"""Security scan domain exports."""

from .secret_rules import DEFAULT_SECRET_RULES, SecretRule
from .secret_scanner import ScanReport, ScanStatus, check_permissions, scan_files, scan_text

__all__ = [
    "DEFAULT_SECRET_RULES",
    "ScanReport",
    "ScanStatus",
    "SecretRule",
    "check_permissions",
    "scan_files",
    "scan_text",
]
