"""Fatal error taxonomy shared by all pipeline steps."""

from __future__ import annotations


class OrchestrationError(Exception):
    """Base class for conditions that abort the pipeline."""

    exit_code = 1


class ToolMissingError(OrchestrationError):
    """Raised when the external collection runner cannot be located."""


class FileMissingError(OrchestrationError):
    """Raised when a required input file does not exist."""


class MalformedInputError(OrchestrationError):
    """Raised when an input file is not well-formed JSON."""


class ValidationFailedError(OrchestrationError):
    """Raised when a collection or environment file fails structural checks."""


class ConfigurationError(OrchestrationError):
    """Raised when the configuration file or an override is invalid."""


class RunFailedError(OrchestrationError):
    """Raised when the external runner exits non-zero."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code if exit_code != 0 else 1
