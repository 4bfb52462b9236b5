"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from weekly_availability.config import CONFIG_FILENAME, AppConfig, get_default_config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        """Test the built-in defaults."""
        config = AppConfig()

        assert config.locale == "en"
        assert config.week_start == 0
        assert config.increment_minutes == 15
        assert config.store_file == Path("schedule.json")

    def test_load_from_yaml(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "api_url: https://cal.example.com\n"
            "locale: nl\n"
            "week_start: 1\n"
            "increment_minutes: 30\n"
            f"store_file: {tmp_path / 'store.json'}\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.api_url == "https://cal.example.com"
        assert config.locale == "nl"
        assert config.week_start == 1
        assert config.increment_minutes == 30
        assert config.store_file == tmp_path / "store.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test that an empty YAML file is valid."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert AppConfig.load_from_yaml(path) == AppConfig()

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that broken YAML raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("locale: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        """Test that a list at the root is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    @pytest.mark.parametrize("increment", [0, -15, 7, 1441])
    def test_invalid_increment(self, increment):
        """Test that the increment must split a day evenly."""
        with pytest.raises(ValueError):
            AppConfig(increment_minutes=increment)

    @pytest.mark.parametrize("week_start", [-1, 7])
    def test_invalid_week_start(self, week_start):
        """Test that week_start must be a weekday index."""
        with pytest.raises(ValueError):
            AppConfig(week_start=week_start)

    def test_invalid_timeout(self):
        """Test that the timeout must be positive."""
        with pytest.raises(ValueError):
            AppConfig(timeout_seconds=0)


class TestDefaultConfigPath:
    """Tests for get_default_config_path."""

    def test_prefers_working_directory(self, tmp_path, monkeypatch):
        """Test that a config.yaml in the working directory wins."""
        (tmp_path / CONFIG_FILENAME).write_text("locale: de\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_default_config_path().resolve() == (tmp_path / CONFIG_FILENAME).resolve()

    def test_returns_a_config_yaml_path(self, tmp_path, monkeypatch):
        """Test that some config.yaml candidate is returned even when none exists here."""
        monkeypatch.chdir(tmp_path)

        path = get_default_config_path()

        assert path.name == CONFIG_FILENAME
        assert path.resolve() == (tmp_path / CONFIG_FILENAME).resolve() or path.exists()
