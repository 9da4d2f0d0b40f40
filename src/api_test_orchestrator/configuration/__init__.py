"""Configuration domain exports."""

from api_test_orchestrator.pipeline_errors import ConfigurationError

from .loader import ENV_API_KEY, default_run_config, load_run_config
from .runtime_settings import ModeSettings, RunConfig, SummarySettings

__all__ = [
    "ConfigurationError",
    "ENV_API_KEY",
    "ModeSettings",
    "RunConfig",
    "SummarySettings",
    "default_run_config",
    "load_run_config",
]
