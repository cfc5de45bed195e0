"""
Unit tests for environment and file based configuration.
"""

import json

import pytest

from fluent_mailerlite.core.config import (
    DEFAULT_BASE_URL,
    AppConfig,
    LoggingConfig,
    MailerLiteConfig,
    load_config,
    parse_timeout,
)
from fluent_mailerlite.core.config_storage import load_config_from_file, save_config_to_file
from fluent_mailerlite.core.errors import ConfigError


class TestLoadConfig:
    """Test loading configuration from the environment."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in (
            "MAILERLITE_API_KEY",
            "MAILERLITE_API_URL",
            "MAILERLITE_TIMEOUT",
            "MAILERLITE_LOG_DIR",
            "MAILERLITE_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = load_config()

        assert config.mailerlite.api_key == ""
        assert config.mailerlite.base_url == DEFAULT_BASE_URL
        assert config.mailerlite.timeout_seconds == 30
        assert config.logging.log_dir == "logs"
        assert config.logging.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        """Test every variable is honoured."""
        monkeypatch.setenv("MAILERLITE_API_KEY", "key-123")
        monkeypatch.setenv("MAILERLITE_API_URL", "https://api.example.com/")
        monkeypatch.setenv("MAILERLITE_TIMEOUT", "12")
        monkeypatch.setenv("MAILERLITE_LOG_LEVEL", "DEBUG")

        config = load_config()

        assert config.mailerlite.api_key == "key-123"
        assert config.mailerlite.base_url == "https://api.example.com/"
        assert config.mailerlite.timeout_seconds == 12
        assert config.logging.log_level == "DEBUG"

    def test_non_integer_timeout(self, monkeypatch):
        """Test a junk timeout raises ConfigError."""
        monkeypatch.setenv("MAILERLITE_TIMEOUT", "soon")
        with pytest.raises(ConfigError, match="MAILERLITE_TIMEOUT must be an integer"):
            load_config()


class TestParseTimeout:
    """Test timeout parsing."""

    def test_accepts_int_and_string(self):
        """Test both int and numeric strings."""
        assert parse_timeout(5) == 5
        assert parse_timeout("45") == 45

    def test_rejects_zero(self):
        """Test non-positive values."""
        with pytest.raises(ConfigError, match="greater than zero"):
            parse_timeout(0)


class TestConfigStorage:
    """Test JSON persistence of AppConfig."""

    def test_save_then_load(self, tmp_path):
        """Test a saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.json"
        config = AppConfig(
            mailerlite=MailerLiteConfig(api_key="abc", timeout_seconds=10),
            logging=LoggingConfig(log_dir="var/log", log_level="WARNING"),
        )

        save_config_to_file(config, str(path))
        loaded = load_config_from_file(str(path))

        assert loaded == config
        assert json.loads(path.read_text())["mailerlite"]["api_key"] == "abc"

    def test_missing_file_falls_back_to_environment(self, tmp_path, monkeypatch):
        """Test the environment is used when the file is absent."""
        monkeypatch.setenv("MAILERLITE_API_KEY", "from-env")
        monkeypatch.delenv("MAILERLITE_TIMEOUT", raising=False)

        config = load_config_from_file(str(tmp_path / "absent.json"))

        assert config.mailerlite.api_key == "from-env"

    def test_malformed_json(self, tmp_path):
        """Test malformed JSON raises ConfigError."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config_from_file(str(path))

    def test_non_object_top_level(self, tmp_path):
        """Test a JSON list is rejected."""
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config_from_file(str(path))

    def test_file_without_mailerlite_section(self, tmp_path):
        """Test the mailerlite section is optional."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging": {"log_level": "DEBUG"}}))

        config = load_config_from_file(str(path))

        assert config.mailerlite is None
        assert config.logging.log_level == "DEBUG"
