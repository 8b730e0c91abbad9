"""Tests for configuration models and the YAML loader."""

import pytest
import yaml

from cascada.config.loader import ConfigLoader
from cascada.config.models import CancellationConfig, CascadaConfig
from cascada.core.errors import ConfigError


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


class TestConfigLoader:
    """Tests for ConfigLoader.load."""

    def test_load_single_file(self, tmp_path):
        # Arrange
        path = write_yaml(
            tmp_path / "cascada.yaml",
            {
                "version": "1.0",
                "settings": {
                    "engine": {"max_steps_per_turn": 10},
                    "classifier": {"enabled": False},
                    "bot": {"reprompt": "¿algo más?"},
                },
            },
        )

        # Act
        config = ConfigLoader.load(path)

        # Assert
        assert config.settings.engine.max_steps_per_turn == 10
        assert config.settings.engine.default_max_retries == 3
        assert not config.settings.classifier.is_configured
        assert config.settings.bot.reprompt == "¿algo más?"

    def test_directory_with_master_file(self, tmp_path):
        write_yaml(tmp_path / "cascada.yaml", {"settings": {"log_level": "DEBUG"}})
        write_yaml(tmp_path / "other.yaml", {"settings": {"log_level": "ERROR"}})

        config = ConfigLoader.load(tmp_path)

        assert config.settings.log_level == "DEBUG"

    def test_directory_files_are_merged_in_order(self, tmp_path):
        """
        GIVEN a directory of partial config files and no master file
        WHEN loaded
        THEN nested settings are deep-merged with later files winning
        """
        # Arrange
        write_yaml(tmp_path / "10-engine.yaml", {"settings": {"engine": {"max_steps_per_turn": 8}}})
        write_yaml(
            tmp_path / "20-engine.yaml",
            {"settings": {"engine": {"default_max_retries": 1}, "log_level": "WARNING"}},
        )

        # Act
        config = ConfigLoader.load(tmp_path)

        # Assert
        assert config.settings.engine.max_steps_per_turn == 8
        assert config.settings.engine.default_max_retries == 1
        assert config.settings.log_level == "WARNING"

    def test_empty_file_yields_defaults(self, tmp_path):
        path = tmp_path / "cascada.yaml"
        path.write_text("", encoding="utf-8")

        assert ConfigLoader.load(path) == CascadaConfig()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(tmp_path / "nope.yaml")

    def test_empty_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(tmp_path)

    def test_malformed_yaml_raises_config_error(self, tmp_path):
        path = tmp_path / "cascada.yaml"
        path.write_text("settings: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader.load(path)

    def test_non_mapping_raises_config_error(self, tmp_path):
        path = tmp_path / "cascada.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader.load(path)

    def test_invalid_values_raise_config_error(self, tmp_path):
        path = write_yaml(
            tmp_path / "cascada.yaml", {"settings": {"engine": {"max_steps_per_turn": 0}}}
        )

        with pytest.raises(ConfigError):
            ConfigLoader.load(path)

    def test_unsupported_version_raises_config_error(self, tmp_path):
        path = write_yaml(tmp_path / "cascada.yaml", {"version": "9.9"})

        with pytest.raises(ConfigError, match="Unsupported config version"):
            ConfigLoader.load(path)


def test_cancellation_keywords_are_normalized():
    config = CancellationConfig(keywords=[" Cancel ", "SALIR"])

    assert config.keywords == ["cancel", "salir"]
