"""Run execution domain exports."""

from .collection_runner import (
    CollectionRunner,
    CommandRunner,
    OutputSink,
    build_dry_run_command,
    build_runner_command,
    run_subprocess,
)
from .mode_pipeline import ModePipeline
from .run_contracts import CommandOutput, RunMode, RunResult

__all__ = [
    "CollectionRunner",
    "CommandOutput",
    "CommandRunner",
    "ModePipeline",
    "OutputSink",
    "RunMode",
    "RunResult",
    "build_dry_run_command",
    "build_runner_command",
    "run_subprocess",
]
