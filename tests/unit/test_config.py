"""Unit tests for bookstore_apitests.config module."""

from unittest.mock import patch

import pytest

from bookstore_apitests.config import (
    DEFAULT_BASE_URL,
    DEFAULT_LOGIN_PATH,
    SuiteConfig,
    load_config,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BOOKSTORE_* variables from the environment."""
    for name in (
        "BOOKSTORE_BASE_URL",
        "BOOKSTORE_TIMEOUT",
        "BOOKSTORE_EMAIL",
        "BOOKSTORE_PASSWORD",
        "BOOKSTORE_LOGIN_PATH",
        "BOOKSTORE_INSECURE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.cli_unit
class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, clean_env, tmp_path):
        with patch("bookstore_apitests.config.get_config_path", return_value=tmp_path / "none.yaml"):
            config = load_config()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.login_path == DEFAULT_LOGIN_PATH
        assert config.timeout == 30.0
        assert config.get_source("base_url") == "default"

    def test_config_file(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("base_url: http://books.local:8080\ntimeout: 5\nemail: qa@example.com\n")

        config = load_config(config_file)

        assert config.base_url == "http://books.local:8080"
        assert config.timeout == 5.0
        assert config.email == "qa@example.com"
        assert config.get_source("base_url") == "config file"
        assert config.get_source("password") == "default"

    def test_env_overrides_file(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("base_url: http://books.local:8080\n")
        clean_env.setenv("BOOKSTORE_BASE_URL", "http://env.local")
        clean_env.setenv("BOOKSTORE_INSECURE", "true")

        config = load_config(config_file)

        assert config.base_url == "http://env.local"
        assert config.get_source("base_url") == "environment"
        assert config.insecure is True

    def test_invalid_env_timeout_ignored(self, clean_env, tmp_path):
        clean_env.setenv("BOOKSTORE_TIMEOUT", "soon")

        config = load_config(tmp_path / "none.yaml")

        assert config.timeout == 30.0
        assert config.get_source("timeout") == "default"

    def test_broken_config_file_falls_back_to_defaults(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("base_url: [unclosed\n")

        config = load_config(config_file)

        assert config.base_url == DEFAULT_BASE_URL


@pytest.mark.cli_unit
class TestSuiteConfig:
    """Tests for SuiteConfig helpers."""

    def test_override_skips_unset_values(self):
        config = SuiteConfig().override(base_url="http://cli.local", email=None, timeout="12")

        assert config.base_url == "http://cli.local"
        assert config.timeout == 12.0
        assert config.get_source("base_url") == "cli"
        assert config.get_source("email") == "default"

    def test_override_unknown_key(self):
        with pytest.raises(KeyError):
            SuiteConfig().override(port=80)

    def test_to_dict_masks_password(self):
        values = SuiteConfig(password="secret").to_dict()

        assert values["password"] == "********"
        assert SuiteConfig(password="secret").to_dict(redact=False)["password"] == "secret"
