"""Tests for termtop configuration."""

from pathlib import Path

import pytest

from termtop import config as config_module
from termtop.config import ConfigError, LoggingSettings, Settings, deep_merge, get_config_path, load_settings


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Point the default config location at an empty directory."""
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.yaml")


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self):
        """Test defaults match the refresh and listing behaviour."""
        settings = Settings()
        assert settings.interval == 2.0
        assert settings.list_limit == 15
        assert settings.top_default == 15
        assert settings.color is True
        assert settings.logging == LoggingSettings()
        assert settings.logging.enabled is False

    def test_interval_minimum(self):
        """Test intervals under 0.1 seconds are rejected."""
        with pytest.raises(ValueError):
            Settings(interval=0.01)

    def test_unknown_keys_rejected(self):
        """Test typos in settings are errors."""
        with pytest.raises(ValueError):
            Settings(intervall=1.0)


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_merge(self):
        """Test nested dicts merge instead of replacing."""
        base = {"logging": {"enabled": False, "level": "INFO"}, "color": True}
        result = deep_merge(base, {"logging": {"level": "DEBUG"}})
        assert result == {"logging": {"enabled": False, "level": "DEBUG"}, "color": True}
        assert base["logging"]["level"] == "INFO"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_no_file_gives_defaults(self):
        """Test loading without any file returns defaults."""
        assert load_settings() == Settings()

    def test_default_location_used_when_present(self, monkeypatch, tmp_path):
        """Test the default config file is picked up."""
        path = tmp_path / "config.yaml"
        path.write_text("list_limit: 5\n")
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", path)

        assert get_config_path() == path
        assert load_settings().list_limit == 5

    def test_yaml_file(self, tmp_path):
        """Test values are read from a YAML file."""
        path = tmp_path / "termtop.yaml"
        path.write_text("interval: 0.5\ncolor: false\nlogging:\n  enabled: true\n  level: DEBUG\n")

        settings = load_settings(path)
        assert settings.interval == 0.5
        assert settings.color is False
        assert settings.logging.enabled is True
        assert settings.logging.level == "DEBUG"

    def test_overrides_win(self, tmp_path):
        """Test command-line overrides beat file values and None is ignored."""
        path = tmp_path / "termtop.yaml"
        path.write_text("interval: 5\ntop_default: 20\n")

        settings = load_settings(path, {"interval": 1.0, "top_default": None})
        assert settings.interval == 1.0
        assert settings.top_default == 20

    def test_empty_file(self, tmp_path):
        """Test an empty file means defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_missing_explicit_file(self, tmp_path):
        """Test a missing explicit path is an error."""
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test bad YAML raises ConfigError naming the file."""
        path = tmp_path / "bad.yaml"
        path.write_text("interval: [1, 2\n")

        with pytest.raises(ConfigError) as excinfo:
            load_settings(path)
        assert excinfo.value.file_path == str(path)
        assert "Invalid YAML" in str(excinfo.value)

    def test_non_mapping(self, tmp_path):
        """Test a list at the top level is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        """Test out-of-range values raise ConfigError with the field name."""
        path = tmp_path / "values.yaml"
        path.write_text("list_limit: 0\n")

        with pytest.raises(ConfigError) as excinfo:
            load_settings(Path(path))
        assert "list_limit" in str(excinfo.value)
