"""Secret scanner tests."""

from __future__ import annotations

import re
from pathlib import Path

from api_test_orchestrator.findings import Severity
from api_test_orchestrator.security_scan import (
    DEFAULT_SECRET_RULES,
    ScanStatus,
    SecretRule,
    check_permissions,
    scan_files,
)


def _write(path: Path, contents: str, mode: int = 0o600) -> Path:
    path.write_text(contents, encoding="utf-8")
    path.chmod(mode)
    return path


def test_flags_appid_followed_by_hex_key(tmp_path: Path) -> None:
    path = _write(tmp_path / "env.json", '{"query": "appid1234567890abcdef1234567890ab"}')

    report = scan_files([path])

    assert report.status is ScanStatus.WARNINGS
    assert any("API key" in finding.message for finding in report.findings)


def test_flags_appid_value_in_environment_entry(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "env.json",
        '{"key": "appid", "value": "0123456789abcdef0123456789abcdef"}',
    )

    assert scan_files([path]).status is ScanStatus.WARNINGS


def test_plain_text_without_hex_key_passes(tmp_path: Path) -> None:
    path = _write(tmp_path / "env.json", '{"key": "appid", "value": "{{API_KEY}}"}')

    report = scan_files([path])

    assert report.status is ScanStatus.PASSED
    assert report.findings == ()


def test_flags_secret_keywords_and_prefixes_with_line_numbers(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "collection.json",
        'line one\n"token": "sk_live_abc"\n"password": "x"\n"task_id": 1\n',
    )

    report = scan_files([path])

    assert [finding.line_number for finding in report.findings] == [2, 3]
    assert report.findings[0].render().endswith("collection.json:2)")


def test_flags_permissions_beyond_owner_read_write(tmp_path: Path) -> None:
    loose = _write(tmp_path / "loose.json", "{}", mode=0o666)
    executable = _write(tmp_path / "exec.json", "{}", mode=0o744)
    strict = _write(tmp_path / "strict.json", "{}", mode=0o644)

    assert check_permissions(loose)
    assert check_permissions(executable)
    assert check_permissions(strict) == []


def test_missing_file_is_reported_without_failing(tmp_path: Path) -> None:
    report = scan_files([tmp_path / "absent.json"])

    assert report.status is ScanStatus.WARNINGS
    assert "not found" in report.findings[0].message


def test_custom_rules_can_be_plugged_in(tmp_path: Path) -> None:
    path = _write(tmp_path / "env.json", "Bearer abc.def.ghi\n")
    rule = SecretRule(
        name="bearer",
        pattern=re.compile(r"Bearer \S+"),
        severity=Severity.ERROR,
        message="Bearer token found",
    )

    assert scan_files([path], rules=DEFAULT_SECRET_RULES).findings == ()
    assert scan_files([path], rules=(rule,)).findings[0].message == "Bearer token found"


def test_short_hex_run_after_appid_is_not_flagged(tmp_path: Path) -> None:
    path = _write(tmp_path / "collection.json", '"raw": "?appid=0123456789abcdef01234567"')

    assert scan_files([path]).status is ScanStatus.PASSED
