"""Configuration loading and validation."""

from .loader import load_config, load_default_config
from .schema import (
    FileLoggingConfig,
    LoggingConfig,
    ReporterConfig,
    ThemeConfig,
)

__all__ = [
    # Loader
    "load_config",
    "load_default_config",
    # Root config
    "ReporterConfig",
    # Nested configs
    "ThemeConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
