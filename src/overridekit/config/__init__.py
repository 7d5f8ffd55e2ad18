"""Config module exports."""

from overridekit.config.loader import load_config
from overridekit.config.models import (
    CollectorConfig,
    EmitterConfig,
    LoggingConfig,
    LogOutputConfig,
    OverrideKitConfig,
)

__all__ = [
    "load_config",
    "OverrideKitConfig",
    "CollectorConfig",
    "EmitterConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
