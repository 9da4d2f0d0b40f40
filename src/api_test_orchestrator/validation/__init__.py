"""Validation domain exports."""

from .input_validation import (
    check_collection_structure,
    check_environment_structure,
    dry_run_collection,
    validate_files,
    validate_json,
)

__all__ = [
    "check_collection_structure",
    "check_environment_structure",
    "dry_run_collection",
    "validate_files",
    "validate_json",
]
