"""Tests for configuration loading, validation and strategy registry."""

import pytest

from geoscope.errors import PreconditionError
from geoscope.registry import DISAMBIGUATION, SCOPE, get_strategy, list_strategies
from geoscope.utils import DEFAULT_CONFIG, ConfigManager, GeoscopeConfig


class TestConfigManager:

    def test_defaults(self):
        config = ConfigManager().resolve()
        assert config.disambiguation_strategy == "feature"
        assert config.scope_strategy == "midpoint"
        assert config.distance_radii_km == [10, 50, 100, 250]
        assert config.log_level == "INFO"

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml")
        assert manager.get("scope.strategy") == "midpoint"

    def test_yaml_overrides_are_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scope:\n  strategy: first\nlogging:\n  level: debug\n")

        config = ConfigManager(path).resolve()
        assert config.scope_strategy == "first"
        assert config.log_level == "DEBUG"
        assert config.disambiguation_strategy == "feature"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scope: [unclosed\n")
        with pytest.raises(PreconditionError):
            ConfigManager(path)

    def test_invalid_values(self):
        manager = ConfigManager()
        manager.set("features.distance_radii_km", [10, -5])
        with pytest.raises(PreconditionError):
            manager.resolve()

    def test_set_does_not_touch_defaults(self):
        manager = ConfigManager()
        manager.set("scope.strategy", "population")
        assert manager.get("scope.strategy") == "population"
        assert DEFAULT_CONFIG["scope"]["strategy"] == "midpoint"

    def test_get_with_default(self):
        assert ConfigManager().get("no.such.key", 42) == 42

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "saved.yaml"
        manager = ConfigManager()
        manager.set("disambiguation.strategy", "population")
        manager.save_config(path)

        assert ConfigManager(path).resolve().disambiguation_strategy == "population"


class TestGeoscopeConfig:

    def test_rejects_unknown_level(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            GeoscopeConfig(log_level="LOUD")


class TestRegistry:

    def test_registered_strategies(self):
        assert list_strategies(DISAMBIGUATION) == ["feature", "population"]
        assert list_strategies(SCOPE) == ["first", "midpoint", "population"]

    def test_unknown_strategy_lists_known_names(self):
        with pytest.raises(KeyError, match="midpoint"):
            get_strategy(SCOPE, "centroid")
