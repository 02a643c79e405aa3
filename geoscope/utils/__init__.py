"""Configuration and logging helpers."""

from .config import DEFAULT_CONFIG, ConfigManager, GeoscopeConfig
from .logging import setup_logging

__all__ = ["DEFAULT_CONFIG", "ConfigManager", "GeoscopeConfig", "setup_logging"]
