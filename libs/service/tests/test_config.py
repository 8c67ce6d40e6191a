"""Unit tests for service configuration loading."""

from pathlib import Path

import pytest

from indexer_service.config import (
    CONFIG_PATH_ENV,
    ConfigManager,
    LoggingConfig,
    ServiceConfig,
)
from indexer_service.errors import ConfigError


class TestServiceConfig:
    """Tests for ServiceConfig defaults."""

    def test_default_values(self):
        config = ServiceConfig()

        assert config.label == "com.m24.tools.indexer"
        assert config.launch_agents_path == Path.home() / "Library" / "LaunchAgents"
        assert config.log_path == Path.home() / "Library" / "Logs"
        assert config.bin_dir_env_var == "M24_BIN_DIR"
        assert config.process_type == "Background"
        assert config.packaged is None
        assert config.launchctl_timeout is None
        assert config.rebuild_on_restart is False
        assert config.logging == LoggingConfig()

    def test_logging_section_from_dict(self):
        config = ServiceConfig(logging={"level": "DEBUG"})

        assert config.logging.level == "DEBUG"
        assert config.logging.log_dir == "~/.m24/logs"

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError):
            ServiceConfig(launchctl_timeout=0)


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_gives_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml")

        assert manager.config == ServiceConfig()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text(
            "label: com.example.indexer\n"
            "launchctl_timeout: 15\n"
            "rebuild_on_restart: true\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = ConfigManager(path).config

        assert config.label == "com.example.indexer"
        assert config.launchctl_timeout == 15
        assert config.rebuild_on_restart is True
        assert config.logging.level == "DEBUG"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("label: com.env.indexer\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

        manager = ConfigManager()

        assert manager.config_path == path
        assert manager.config.label == "com.env.indexer"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert ConfigManager(path).config == ServiceConfig()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("lable: typo\n")

        with pytest.raises(ConfigError, match="lable"):
            ConfigManager(path)

    def test_unknown_logging_key(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("logging:\n  colour: true\n")

        with pytest.raises(ConfigError, match="colour"):
            ConfigManager(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("label: [unclosed\n")

        with pytest.raises(ConfigError):
            ConfigManager(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            ConfigManager(path)

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "conf" / "service.yaml"
        manager = ConfigManager(path)
        config = ServiceConfig(label="com.saved.indexer", packaged=True)

        manager.save_config(config)

        assert ConfigManager(path).config == config

    def test_string_timeout(self, tmp_path):
        """Test a quoted number is rejected instead of failing later."""
        path = tmp_path / "service.yaml"
        path.write_text('launchctl_timeout: "30"\n')

        with pytest.raises(ConfigError, match="launchctl_timeout must be float or null, got str"):
            ConfigManager(path)

    def test_non_string_path(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("launch_agents_dir: 5\n")

        with pytest.raises(ConfigError, match="launch_agents_dir must be str, got int"):
            ConfigManager(path)

    def test_bool_timeout(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("launchctl_timeout: true\n")

        with pytest.raises(ConfigError, match="launchctl_timeout"):
            ConfigManager(path)

    def test_string_packaged(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text('packaged: "yes"\n')

        with pytest.raises(ConfigError, match="packaged must be bool or null"):
            ConfigManager(path)

    def test_logging_value_type(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("logging:\n  enable_console: 1\n")

        with pytest.raises(ConfigError, match="enable_console must be bool"):
            ConfigManager(path)

    def test_logging_not_a_mapping(self, tmp_path):
        path = tmp_path / "service.yaml"
        path.write_text("logging: verbose\n")

        with pytest.raises(ConfigError, match="logging must be LoggingConfig"):
            ConfigManager(path)
