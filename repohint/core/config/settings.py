"""
Main configuration class that composes all configs.

The configuration lives in a directory holding ``config.json``. Every scalar
key can be overridden with a ``REPOHINT_<KEY>`` environment variable.
"""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from repohint.core.config.github_config import GitHubConfig
from repohint.core.config.logging_config import LoggingConfig
from repohint.core.config.rules_config import (
    DEFAULT_CODE_RULES,
    DEFAULT_CRITERION_RULES,
    DEFAULT_PREPROCESSORS,
    RulesConfig,
)
from repohint.core.config.server_config import ServerConfig
from repohint.core.config.workspace_config import WorkspaceConfig
from repohint.core.errors import ConfigurationError

# Load environment variables from a .env file
load_dotenv()

CONFIG_FILE_NAME = "config.json"
ENV_PREFIX = "REPOHINT_"


def _read_config_file(config_dir: Path) -> dict[str, Any]:
    config_file = config_dir / CONFIG_FILE_NAME
    try:
        raw = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Unable to read {config_file}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed reading configuration {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file} must contain a JSON object")
    return data


class Config:
    """Main configuration class."""

    def __init__(self, values: dict[str, Any], config_dir: str | Path) -> None:
        self.config_dir = Path(config_dir)
        # Values that could not be converted; reported by validate()
        self.value_errors: list[str] = []

        def setting(key: str, default: Any = None) -> Any:
            value = os.getenv(f"{ENV_PREFIX}{key}")
            if value is None:
                value = values.get(key, default)
            return value

        def number(key: str, default: Any, cast: type) -> Any:
            value = setting(key, default)
            if value in (None, ""):
                return default
            try:
                return cast(value)
            except (TypeError, ValueError):
                self.value_errors.append(f"{key} must be a number, got {value!r}")
                return default

        self.github = GitHubConfig(
            repo=setting("REPO", ""),
            user_agent=setting("USER_AGENT", ""),
            token=setting("TOKEN", ""),
            api_base_url=setting("API_BASE_URL", "https://api.github.com"),
            request_timeout=number("REQUEST_TIMEOUT", 10.0, float),
        )

        port = setting("PORT")
        self.server = ServerConfig(
            secret_key=setting("SECRET_KEY", ""),
            host=setting("HOST", "localhost"),
            protocol=setting("PROTOCOL", "http"),
            port=str(port) if port not in (None, "") else None,
            server_port=number("SERVER_PORT", 0, int),
            recheck_cooldown=number("RECHECK_COOLDOWN", 10.0, float),
        )

        self.workspace = WorkspaceConfig(
            temp_dir=setting("TEMP_DIR") or str(self.config_dir),
            code_dir=setting("CODE_DIR") or None,
            base_branch=setting("BASE_BRANCH") or None,
        )

        rules = values.get("RULES") or {}
        if not isinstance(rules, dict):
            raise ConfigurationError("RULES must be an object")
        self.rules = RulesConfig(
            preprocessors=list(rules.get("PREPROCESSORS", DEFAULT_PREPROCESSORS)),
            code_rules=list(rules.get("CODE_RULES", DEFAULT_CODE_RULES)),
            criterion_rules=list(rules.get("CRITERION_RULES", DEFAULT_CRITERION_RULES)),
        )

        self.logging = LoggingConfig(
            level=setting("LOG_LEVEL", "INFO"),
            format=setting("LOG_FORMAT", "%(asctime)s %(levelname)8s %(message)s"),
        )

    @classmethod
    def from_directory(cls, config_dir: str | Path) -> "Config":
        """Read ``config.json`` from ``config_dir``."""
        path = Path(config_dir)
        return cls(_read_config_file(path), path)

    def validate(self, require_server: bool = False) -> bool:
        """Validate configuration."""
        errors = list(self.value_errors)

        if not self.github.repo:
            errors.append("REPO is required")
        elif "/" not in self.github.repo:
            errors.append("REPO must look like owner/name")

        if not self.github.user_agent:
            errors.append("USER_AGENT is required")

        if not self.github.token:
            errors.append("TOKEN is required")

        if require_server:
            if not self.server.secret_key:
                errors.append("SECRET_KEY is required")
            if not self.server.server_port:
                errors.append("SERVER_PORT is required")

        if self.server.protocol not in ("http", "https"):
            errors.append("PROTOCOL must be http or https")

        if errors:
            raise ConfigurationError(errors)

        return True


def load_config(config_dir: str | Path, require_server: bool = False) -> Config:
    """Load and validate the configuration stored in ``config_dir``."""
    config = Config.from_directory(config_dir)
    config.validate(require_server=require_server)
    return config
