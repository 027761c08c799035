"""Suite configuration management.

Handles the target environment settings stored in
~/.bookstore-apitests/config.yaml. Supports environment variable overrides and
CLI flag precedence.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .shared.logging import get_logger

logger = get_logger(__name__)

# Default values
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 30.0
DEFAULT_EMAIL = "john.doe@example.com"
DEFAULT_PASSWORD = "password123"
DEFAULT_LOGIN_PATH = "/users/login"

CONFIG_KEYS = ("base_url", "timeout", "email", "password", "login_path", "insecure")

# Environment variable mappings
ENV_VARS = {
    "base_url": "BOOKSTORE_BASE_URL",
    "timeout": "BOOKSTORE_TIMEOUT",
    "email": "BOOKSTORE_EMAIL",
    "password": "BOOKSTORE_PASSWORD",
    "login_path": "BOOKSTORE_LOGIN_PATH",
    "insecure": "BOOKSTORE_INSECURE",
}


@dataclass
class SuiteConfig:
    """Target environment for the scenarios."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    email: str = DEFAULT_EMAIL
    password: str = DEFAULT_PASSWORD
    login_path: str = DEFAULT_LOGIN_PATH
    insecure: bool = False

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict, repr=False)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def override(self, **values: Any) -> "SuiteConfig":
        """Apply CLI flag values, skipping the ones left unset."""
        for key, value in values.items():
            if key not in CONFIG_KEYS:
                raise KeyError(f"Unknown config key: {key}")
            if value is None:
                continue
            setattr(self, key, _coerce(key, value))
            self._sources[key] = "cli"
        return self

    def to_dict(self, redact: bool = True) -> dict[str, Any]:
        """Config values as a plain dict, password masked by default."""
        values = {key: getattr(self, key) for key in CONFIG_KEYS}
        if redact and values["password"]:
            values["password"] = "********"
        return values


def _coerce(key: str, value: Any) -> Any:
    if key == "timeout":
        return float(value)
    if key == "insecure":
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    return str(value)


def get_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to ~/.bookstore-apitests/config.yaml
    """
    return Path.home() / ".bookstore-apitests" / "config.yaml"


def load_config(path: str | Path | None = None) -> SuiteConfig:
    """Load suite configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (``path`` or ~/.bookstore-apitests/config.yaml)
    3. Defaults

    CLI flags are applied afterwards with ``SuiteConfig.override``.

    Args:
        path: Explicit config file path

    Returns:
        SuiteConfig with values and sources
    """
    config = SuiteConfig()
    sources: dict[str, str] = {key: "default" for key in CONFIG_KEYS}

    # Load from config file
    config_path = Path(path) if path else get_config_path()
    if config_path.exists():
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
            for key in CONFIG_KEYS:
                if key in file_config:
                    setattr(config, key, _coerce(key, file_config[key]))
                    sources[key] = "config file"
        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            logger.warning("config_file_ignored", path=str(config_path), error=str(e))

    # Override with environment variables
    for key, env_var in ENV_VARS.items():
        raw = os.environ.get(env_var)
        if not raw:
            continue
        try:
            setattr(config, key, _coerce(key, raw))
            sources[key] = "environment"
        except ValueError:
            logger.warning("env_var_ignored", env_var=env_var)

    config._sources = sources
    return config
