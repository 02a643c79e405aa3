"""
Configuration management for the location pipeline
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import PreconditionError

logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "disambiguation": {
        "strategy": "feature"
    },
    "scope": {
        "strategy": "midpoint"
    },
    "features": {
        "distance_radii_km": [10, 50, 100, 250]
    },
    "logging": {
        "level": "INFO"
    }
}


class GeoscopeConfig(BaseModel):
    """Validated view of the resolved configuration."""

    disambiguation_strategy: str = "feature"
    scope_strategy: str = "midpoint"
    distance_radii_km: List[float] = Field(default_factory=lambda: [10, 50, 100, 250])
    log_level: str = "INFO"

    @field_validator("distance_radii_km")
    @classmethod
    def _positive_radii(cls, value: List[float]) -> List[float]:
        if any(radius <= 0 for radius in value):
            raise ValueError("distance radii must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"unknown log level: {value}")
        return value


class ConfigManager:
    """Manages configuration for the location pipeline"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML config file, if None uses defaults
        """
        self.config = self._merge_configs(DEFAULT_CONFIG, {})

        if config_path and config_path.exists():
            self.load_config(config_path)
        elif config_path:
            logger.warning(f"Config file not found: {config_path}, using defaults")

    def load_config(self, config_path: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise PreconditionError(f"Failed to load config from {config_path}: {e}") from e

        if not isinstance(file_config, dict):
            raise PreconditionError(f"Config file {config_path} must contain a mapping")

        # Deep merge with default config
        self.config = self._merge_configs(DEFAULT_CONFIG, file_config)
        logger.info(f"Loaded configuration from {config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'scope.strategy'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation."""
        keys = key_path.split('.')
        config = self.config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def resolve(self) -> GeoscopeConfig:
        """Validate the merged configuration."""
        try:
            return GeoscopeConfig(
                disambiguation_strategy=self.get("disambiguation.strategy", "feature"),
                scope_strategy=self.get("scope.strategy", "midpoint"),
                distance_radii_km=self.get("features.distance_radii_km", [10, 50, 100, 250]),
                log_level=self.get("logging.level", "INFO"),
            )
        except ValidationError as e:
            raise PreconditionError(f"Invalid configuration: {e}") from e

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = {
            key: self._merge_configs(value, {}) if isinstance(value, dict) else value
            for key, value in base.items()
        }

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config_path: Path) -> None:
        """Save current configuration to YAML file."""
        with open(config_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False, indent=2)
        logger.info(f"Saved configuration to {config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return self._merge_configs(self.config, {})
