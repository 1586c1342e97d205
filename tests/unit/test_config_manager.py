"""Tests for ConfigManager."""

from pathlib import Path

import pytest
import yaml

from feedstore.config.manager import ConfigManager
from feedstore.config.schema import FetchConfig, GlobalConfig
from feedstore.utils.errors import ConfigError, InvalidConfigError


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_init_with_custom_dir(self, tmp_path: Path) -> None:
        """Test ConfigManager initialization with custom directory."""
        manager = ConfigManager(config_dir=tmp_path)
        assert manager.config_dir == tmp_path
        assert manager.config_file == tmp_path / "config.yaml"

    def test_default_dir_follows_xdg(self, tmp_path: Path, monkeypatch) -> None:
        """Test the default location honours XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        manager = ConfigManager()
        assert manager.config_file == tmp_path / "feedstore" / "config.yaml"

    def test_load_config_creates_default_if_missing(self, tmp_path: Path) -> None:
        """Test that load_config creates default config if file doesn't exist."""
        manager = ConfigManager(config_dir=tmp_path / "nested")
        config = manager.load_config()

        assert config == GlobalConfig()
        assert manager.config_file.exists()

    def test_load_config_from_existing_file(self, tmp_path: Path) -> None:
        """Test loading config from existing file."""
        config_file = tmp_path / "config.yaml"
        with open(config_file, "w") as f:
            yaml.safe_dump(
                {"log_level": "DEBUG", "fetch": {"timeout_seconds": 5, "max_attempts": 1}},
                f,
            )

        config = ConfigManager(config_dir=tmp_path).load_config()

        assert config.log_level == "DEBUG"
        assert config.fetch.timeout_seconds == 5
        assert config.fetch.max_attempts == 1

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """Test that an empty YAML file is treated as defaults."""
        (tmp_path / "config.yaml").write_text("")
        assert ConfigManager(config_dir=tmp_path).load_config() == GlobalConfig()

    def test_save_config(self, tmp_path: Path) -> None:
        """Test saving configuration."""
        manager = ConfigManager(config_dir=tmp_path)
        config = GlobalConfig(
            log_level="WARNING",
            fetch=FetchConfig(max_attempts=5),
        )

        manager.save_config(config)

        with open(manager.config_file) as f:
            data = yaml.safe_load(f)
        assert data["log_level"] == "WARNING"
        assert data["fetch"]["max_attempts"] == 5

    def test_save_and_load_round_trip(self, tmp_path: Path) -> None:
        """Test a saved config loads back equal."""
        manager = ConfigManager(config_dir=tmp_path)
        config = GlobalConfig(log_level="DEBUG", fetch=FetchConfig(timeout_seconds=5))

        manager.save_config(config)

        assert manager.load_config() == config

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Test that malformed YAML raises InvalidConfigError."""
        (tmp_path / "config.yaml").write_text("log_level: [unclosed")

        with pytest.raises(InvalidConfigError, match="Invalid configuration"):
            ConfigManager(config_dir=tmp_path).load_config()

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        """Test that schema violations raise InvalidConfigError."""
        (tmp_path / "config.yaml").write_text("fetch:\n  max_attempts: 0\n")

        with pytest.raises(InvalidConfigError):
            ConfigManager(config_dir=tmp_path).load_config()

    def test_unwritable_config_dir_raises(self, tmp_path: Path) -> None:
        """Test that a config dir under a regular file raises ConfigError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        manager = ConfigManager(config_dir=blocker / "cfg")

        with pytest.raises(ConfigError, match="Cannot write configuration"):
            manager.load_config()
