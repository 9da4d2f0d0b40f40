"""Well-formedness and structural checks for collection and environment files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from api_test_orchestrator.configuration.runtime_settings import RunConfig
from api_test_orchestrator.findings import Finding
from api_test_orchestrator.pipeline_errors import MalformedInputError, ValidationFailedError

if TYPE_CHECKING:
    from api_test_orchestrator.run_execution.collection_runner import CollectionRunner


def validate_json(path: Path | str) -> Any:
    """Parse a file as JSON, raising MalformedInputError when it is not well-formed."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MalformedInputError(f"File not found: {source}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"Cannot read {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Invalid JSON in {source}: {exc}") from exc


def check_collection_structure(document: Any, source: Path) -> tuple[str, ...]:
    """Validate the collection layout and return its top-level folder names."""
    if not isinstance(document, Mapping):
        raise ValidationFailedError(f"Collection root must be an object: {source}")
    if not isinstance(document.get("info"), Mapping):
        raise ValidationFailedError(f"Collection is missing its 'info' block: {source}")
    items = document.get("item")
    if not isinstance(items, list):
        raise ValidationFailedError(f"Collection 'item' must be a list: {source}")
    for index, item in enumerate(items):
        if not isinstance(item, Mapping) or not isinstance(item.get("name"), str):
            raise ValidationFailedError(f"Collection item #{index + 1} has no name: {source}")
    return tuple(item["name"] for item in items if isinstance(item.get("item"), list))


def check_environment_structure(document: Any, source: Path) -> tuple[str, ...]:
    """Validate the environment layout and return its variable keys."""
    if not isinstance(document, Mapping):
        raise ValidationFailedError(f"Environment root must be an object: {source}")
    values = document.get("values")
    if not isinstance(values, list):
        raise ValidationFailedError(f"Environment 'values' must be a list: {source}")
    keys = []
    for index, entry in enumerate(values):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("key"), str):
            raise ValidationFailedError(
                f"Environment value #{index + 1} has no string key: {source}"
            )
        keys.append(entry["key"])
    return tuple(keys)


def dry_run_collection(runner: CollectionRunner) -> None:
    """Ask the runner to parse the collection/environment pairing without network calls."""
    result = runner.dry_run()
    if not result.succeeded:
        detail = (result.stderr or result.stdout).strip()
        message = f"Collection dry run failed with exit code {result.exit_code}"
        raise ValidationFailedError(f"{message}: {detail}" if detail else message)


def validate_files(config: RunConfig, runner: CollectionRunner) -> tuple[Finding, ...]:
    """Run JSON, structural and dry-run validation; the runner is not invoked for malformed input."""
    collection = validate_json(config.collection_file)
    environment = validate_json(config.environment_file)

    folders = check_collection_structure(collection, config.collection_file)
    check_environment_structure(environment, config.environment_file)
    findings: list[Finding] = []
    smoke_folder = config.mode_settings("smoke").folder
    if smoke_folder and smoke_folder not in folders:
        findings.append(
            Finding.warning(
                f"Smoke folder '{smoke_folder}' is not a top-level folder of the collection",
                source=config.collection_file,
            )
        )

    dry_run_collection(runner)
    return tuple(findings)
