"""Configuration and logging helpers."""

from .config import ConfigManager, ConfigError, DEFAULT_CONFIG
from .logging import setup_logging

__all__ = ["ConfigManager", "ConfigError", "DEFAULT_CONFIG", "setup_logging"]
