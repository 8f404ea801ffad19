"""Core app services for settings and logging."""

from .config import AppConfig, LoggingConfig, OutputConfig, RenderDefaults, load_config, save_config
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "OutputConfig",
    "RenderDefaults",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
