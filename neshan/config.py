"""
Configuration management for Neshan client.

Configuration lives in a TOML file:

    [neshan]
    api-key = "${NESHAN_API_KEY}"
    base-url = "https://api.neshan.org"
    timeout = 10

    [logging]
    level = "INFO"
    console = true

``${VAR_NAME}`` placeholders are replaced with environment variables, which
may come from a ``.env`` file next to the application.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict

import tomli

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def loadDotEnv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Read file line by line and put KEY=value pairs into dictionary.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True).
            Variables already present in environment are not overridden.

    Returns:
        Dictionary of key-value pairs from .env file (empty if file does not exist)
    """
    ret: Dict[str, str] = {}
    envPath = Path(path)
    if not envPath.is_file():
        logger.debug(f"No dotenv file at {path}")
        return ret

    with open(envPath, "rt", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"').strip("'")

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    return ret


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with its value.

    Unset variables keep the original placeholder.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in strings, dicts and lists.

    Other types are returned unchanged.
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


def requireApiKey(section: Dict[str, Any]) -> str:
    """Get api-key from [neshan] section.

    Raises:
        ConfigurationError: If key is missing or its env placeholder was not substituted
    """
    apiKey = section.get("api-key", "")
    if not apiKey or not isinstance(apiKey, str):
        raise ConfigurationError("Neshan api-key not found in configuration")
    if ENV_VAR_PATTERN.search(apiKey):
        raise ConfigurationError(f"Neshan api-key references unset environment variable: {apiKey}")
    return apiKey


class NeshanConfig:
    """Loads and validates configuration for the Neshan client."""

    def __init__(self, configPath: str = "neshan.toml", dotEnvFile: str = ".env"):
        """Load config file, dood!

        Args:
            configPath: Path to TOML config file
            dotEnvFile: Path to .env file, silently skipped if absent

        Raises:
            ConfigurationError: If file is missing or is not valid TOML
        """
        self.configPath = configPath
        loadDotEnv(path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _loadConfig(self) -> Dict[str, Any]:
        configFile = Path(self.configPath)
        if not configFile.is_file():
            raise ConfigurationError(f"Configuration file {self.configPath} not found")

        try:
            with open(configFile, "rb") as f:
                config = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration {self.configPath}: {e}") from e

        logger.info(f"Loaded config from {self.configPath}")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getClientConfig(self) -> Dict[str, Any]:
        """Get [neshan] section."""
        return self.get("neshan", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get [logging] section."""
        return self.get("logging", {})

    def getApiKey(self) -> str:
        """Get API key from [neshan] section."""
        return requireApiKey(self.getClientConfig())
