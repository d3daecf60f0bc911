"""Tests for configuration loading."""

import pytest

from cave_monster_htn.htn import PlannerConfig, SelectionPolicy
from cave_monster_htn.utils.config import DEFAULT_CONFIG, ConfigError, ConfigManager
from cave_monster_htn.utils.logging import setup_logging


class TestConfigManager:
    def test_defaults(self):
        config = ConfigManager()
        assert config.get("planner.selection") == "random"
        assert config.get("budgets.max_steps") == 10000
        assert config.get("planner.missing", "fallback") == "fallback"

    def test_set_does_not_leak_into_defaults(self):
        config = ConfigManager()
        config.set("budgets.max_steps", 5)
        assert config.get("budgets.max_steps") == 5
        assert DEFAULT_CONFIG["budgets"]["max_steps"] == 10000

    def test_yaml_is_merged(self, tmp_path):
        path = tmp_path / "planner.yaml"
        path.write_text("planner:\n  selection: priority\n  seed: 4\n")
        config = ConfigManager(path)
        assert config.get("planner.selection") == "priority"
        assert config.get("planner.seed") == 4
        assert config.get("planner.include_trace") is True

    def test_missing_file_keeps_defaults(self, tmp_path):
        config = ConfigManager(tmp_path / "nope.yaml")
        assert config.to_dict() == DEFAULT_CONFIG

    def test_broken_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("planner: [unclosed\n")
        with pytest.raises(ConfigError):
            ConfigManager(path)

    def test_save_and_reload(self, tmp_path):
        config = ConfigManager()
        config.set("planner.seed", 12)
        path = tmp_path / "saved.yaml"
        config.save_config(path)
        assert ConfigManager(path).get("planner.seed") == 12


class TestPlannerConfigFromManager:
    def test_builds_planner_config(self):
        config = ConfigManager()
        config.set("planner.selection", "priority")
        config.set("planner.seed", 8)
        config.set("budgets.max_backtracks", 3)
        planner_config = PlannerConfig.from_manager(config)
        assert planner_config.selection is SelectionPolicy.PRIORITY
        assert planner_config.seed == 8
        assert planner_config.budgets.max_backtracks == 3
        assert planner_config.budgets.max_steps == 10000

    def test_unknown_policy(self):
        config = ConfigManager()
        config.set("planner.selection", "cheapest")
        with pytest.raises(ValueError):
            PlannerConfig.from_manager(config)


class TestSetupLogging:
    def test_unknown_level_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level 'loud'"):
            setup_logging(level="loud")
