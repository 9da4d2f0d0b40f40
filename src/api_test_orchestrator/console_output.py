"""Colored status lines written to the terminal."""

from __future__ import annotations

from collections.abc import Iterable

import click

from .findings import Finding, Severity


class Console:
    """Thin wrapper around click output with labeled, colored prefixes."""

    def status(self, message: str) -> None:
        self._labeled("INFO", "blue", message)

    def success(self, message: str) -> None:
        self._labeled("SUCCESS", "green", message)

    def warning(self, message: str) -> None:
        self._labeled("WARNING", "yellow", message)

    def error(self, message: str) -> None:
        self._labeled("ERROR", "red", message, err=True)

    def detail(self, message: str) -> None:
        click.echo(message)

    def runner_output(self, line: str) -> None:
        click.echo(line, nl=False)

    def runner_error(self, line: str) -> None:
        click.echo(line, nl=False, err=True)

    def finding(self, finding: Finding) -> None:
        if finding.severity is Severity.ERROR:
            self.error(finding.render())
        elif finding.severity is Severity.WARNING:
            self.warning(finding.render())
        else:
            self.status(finding.render())

    def findings(self, findings: Iterable[Finding]) -> None:
        for item in findings:
            self.finding(item)

    @staticmethod
    def _labeled(label: str, color: str, message: str, err: bool = False) -> None:
        prefix = click.style(f"[{label}]", fg=color, bold=label == "WARNING")
        click.echo(f"{prefix} {message}", err=err)
