"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import click

from api_test_orchestrator.configuration import load_run_config
from api_test_orchestrator.console_output import Console
from api_test_orchestrator.pipeline_errors import OrchestrationError
from api_test_orchestrator.run_execution import ModePipeline, RunMode

PROG_NAME = "api-test-orchestrator"

USAGE_TEXT = """\
Usage: {prog} {{basic|detailed|performance|smoke|validate|security|full|clean|help}}

Commands:
  basic       - Run basic API tests
  detailed    - Run tests with HTML/JSON reporting
  performance - Run performance-focused tests
  smoke       - Run critical smoke tests only
  validate    - Validate collection and environment files
  security    - Run security scan on files
  full        - Run complete test suite with all checks
  clean       - Clean old report files
  help        - Show this help message

Options:
  --config PATH  YAML file overriding collection, environment and mode settings
  --verbose      Log runner commands and report housekeeping

Environment Variables:
  API_KEY            - API key passed to the collection runner (optional)
  COLLECTION_FILE    - Collection file path override
  ENVIRONMENT_FILE   - Environment file path override
  REPORTS_DIR        - Reports directory override
  COLLECTION_RUNNER  - Runner executable override (default: newman)

Example:
  export API_KEY=your_api_key_here
  {prog} detailed"""


class CliError(click.ClickException):
    """Fatal pipeline error rendered as a labeled error line."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: IO[Any] | None = None) -> None:
        Console().error(self.format_message())


def render_usage(prog: str = PROG_NAME) -> str:
    return USAGE_TEXT.format(prog=prog)


@click.command(
    name=PROG_NAME,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(package_name="api-test-orchestrator")
@click.option(
    "--config",
    "config_path",
    required=False,
    default=None,
    type=click.Path(path_type=str),
    help="Path to an optional YAML run configuration",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.argument("tokens", nargs=-1)
def cli(tokens: tuple[str, ...], config_path: str | None, verbose: bool) -> None:
    """Run API collection tests through an external collection runner.

    Only the first token selects the mode; any further tokens are ignored.
    """
    _configure_logging(verbose)
    run_mode = RunMode.from_token(tokens[0] if tokens else None)
    if run_mode is RunMode.HELP:
        click.echo(render_usage())
        return
    try:
        config = load_run_config(config_path)
        ModePipeline(config).execute(run_mode)
    except OrchestrationError as exc:
        raise CliError(str(exc), exit_code=exc.exit_code) from exc


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
