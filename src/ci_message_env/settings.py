"""Configuration and logging setup for ci-message-env.

Configuration file location priority:
1. Explicit path passed to SettingsLoader
2. CI_MESSAGE_ENV_CONFIG environment variable
3. Standard location: ~/.ci-message-env/config.yml
4. Built-in defaults (if no config file found)

Environment variable overrides (applied on top of the file):
    CI_MESSAGE_ENV_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    CI_MESSAGE_ENV_VERIFY_FILE: true/false, check the message file after writing

Example config file:
```yaml
verify_written_file: true
log_level: DEBUG
```
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

CONFIG_ENV_VAR = "CI_MESSAGE_ENV_CONFIG"
LOG_LEVEL_ENV_VAR = "CI_MESSAGE_ENV_LOG_LEVEL"
VERIFY_FILE_ENV_VAR = "CI_MESSAGE_ENV_VERIFY_FILE"


class ContributorSettings(BaseModel):
    """Settings for the environment contributor."""

    verify_written_file: bool = Field(
        default=True,
        description="Check existence and size of .ci_message.txt after writing (advisory)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the ci_message_env logger",
    )

    model_config = {"extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level


class SettingsLoader:
    """Loader for ContributorSettings from YAML file and environment.

    Usage:
        ```python
        loader = SettingsLoader()
        settings = loader.load()
        contributor = EnvironmentContributor(params, settings=settings)
        ```

    The loaded settings are cached; call once during host startup.
    """

    def __init__(self, config_path: str | Path | None = None):
        """Initialize loader with optional explicit path.

        Args:
            config_path: Explicit path to config file (optional).
                If not provided, uses environment variable or standard location.
        """
        self._settings: ContributorSettings | None = None
        self._explicit_path = Path(config_path) if config_path else None

    def get_config_path(self) -> Path | None:
        """Determine config file path using priority order.

        Returns:
            Path to config file, or None if file doesn't exist
        """
        if self._explicit_path:
            if self._explicit_path.exists():
                return self._explicit_path
            logger.warning(f"Explicit config path does not exist: {self._explicit_path}")
            return None

        env_path_str = os.getenv(CONFIG_ENV_VAR)
        if env_path_str:
            env_path = Path(env_path_str).expanduser()
            if env_path.exists():
                return env_path
            logger.warning(f"{CONFIG_ENV_VAR} path does not exist: {env_path}")
            return None

        standard_path = Path.home() / ".ci-message-env" / "config.yml"
        if standard_path.exists():
            return standard_path

        return None

    def load(self) -> ContributorSettings:
        """Load and validate settings.

        Returns:
            Validated ContributorSettings (defaults if no config file found)

        Raises:
            ValueError: If the config file or an override is invalid
        """
        if self._settings is not None:
            return self._settings

        raw: dict = {}
        config_path = self.get_config_path()
        if config_path is None:
            logger.debug("No config file found, using defaults")
        else:
            logger.info(f"Loading settings from: {config_path}")
            try:
                with open(config_path, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ValueError(f"Failed to load settings from {config_path}: {e}") from e

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file must contain a YAML dictionary: {config_path}")
            raw.update(loaded)

        raw.update(self._env_overrides())

        try:
            settings = ContributorSettings(**raw)
        except ValidationError as e:
            source = config_path or "environment"
            raise ValueError(f"Invalid settings from {source}: {e}") from e

        self._settings = settings
        return settings

    @staticmethod
    def _env_overrides() -> dict[str, object]:
        overrides: dict[str, object] = {}

        log_level = os.getenv(LOG_LEVEL_ENV_VAR)
        if log_level:
            overrides["log_level"] = log_level

        verify = os.getenv(VERIFY_FILE_ENV_VAR)
        if verify:
            # Pydantic accepts true/false/1/0/yes/no/on/off
            overrides["verify_written_file"] = verify.strip()

        return overrides


def configure_logging(
    level: str | None = None, settings: ContributorSettings | None = None
) -> None:
    """Configure stdlib logging for hosts that run the contributor standalone.

    Args:
        level: Log level name; takes precedence over everything else
        settings: Loaded settings whose ``log_level`` is used when no explicit
            level is given (it already carries CI_MESSAGE_ENV_LOG_LEVEL)

    Without either, CI_MESSAGE_ENV_LOG_LEVEL is read directly, then INFO.
    """
    if level is None and settings is not None:
        level = settings.log_level
    log_level_str = (level or os.getenv(LOG_LEVEL_ENV_VAR, "INFO")).upper()

    if log_level_str not in VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid {LOG_LEVEL_ENV_VAR} '{log_level_str}'. "
            f"Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}. "
            "Using INFO.",
            file=sys.stderr,
        )
        log_level_str = "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level_str),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger("ci_message_env").setLevel(getattr(logging, log_level_str))


__all__ = [
    "ContributorSettings",
    "SettingsLoader",
    "configure_logging",
]
