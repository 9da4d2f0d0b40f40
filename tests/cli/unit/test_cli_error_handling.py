"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from api_test_orchestrator.cli import main


def test_unknown_option_returns_clean_click_error(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["basic", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_runner_is_reported_as_labeled_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("COLLECTION_RUNNER", "api-test-orchestrator-missing-runner")
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path / "reports"))

    exit_code = main(["basic"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "[ERROR] api-test-orchestrator-missing-runner is not installed" in captured.err
    assert not (tmp_path / "reports").exists()


def test_invalid_configuration_file_is_reported(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("modes: [1, 2]\n", encoding="utf-8")

    exit_code = main(["--config", str(config_path), "clean"])

    assert exit_code == 1
    assert "must be a mapping" in capsys.readouterr().err


def test_mode_is_taken_from_first_token_when_more_follow(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    reports_dir = tmp_path / "reports"
    reports_dir.mkdir()
    for day in range(1, 8):
        (reports_dir / f"test_summary_202401{day:02d}_120000.md").write_text("s")
    monkeypatch.setenv("REPORTS_DIR", str(reports_dir))

    exit_code = main(["clean", "now"])

    assert exit_code == 0
    assert "Old reports cleaned" in capsys.readouterr().out
    assert len(list(reports_dir.iterdir())) == 5
