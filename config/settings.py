"""
Configuration for the session store.

Settings come from MEMSESSION_* environment variables and from .env files
in the working directory: the base .env first, then .env.<environment>
layered over it. Validation failures surface as ConfigurationError with
one entry per offending field.
"""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from session.identifiers import MAX_SESSION_ID_LENGTH, SESSION_ID_LENGTH

ENV_PREFIX = "MEMSESSION_"


class Environment(str, Enum):
    """Supported deployment environments."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def current(cls) -> "Environment":
        """Environment named by MEMSESSION_ENVIRONMENT; unknown values mean development."""
        raw = os.environ.get(f"{ENV_PREFIX}ENVIRONMENT", "")
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.DEVELOPMENT

    def env_files(self) -> Tuple[str, ...]:
        """The .env files for this environment that exist, lowest priority first."""
        return tuple(f for f in (".env", f".env.{self.value}") if Path(f).is_file())


class Settings(BaseSettings):
    """
    Session store settings.

    Every field has a default, so an empty environment yields a working
    development configuration with 128 character session identifiers.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Environment.DEVELOPMENT

    session_id_length: int = Field(
        default=SESSION_ID_LENGTH,
        ge=SESSION_ID_LENGTH,
        le=MAX_SESSION_ID_LENGTH,
        description="Bytes of secure randomness per session identifier",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level for the JSON log handler",
    )
    service_name: str = Field(
        default="memsession",
        min_length=1,
        description="Value of the 'service' field on every log line",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise to upper case and reject names logging does not know."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v

    @field_validator("service_name", mode="before")
    @classmethod
    def strip_service_name(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class ConfigurationError(Exception):
    """
    Settings could not be loaded.

    Attributes:
        environment: The environment whose files were being read
        invalid_fields: Field name to validation message
    """

    def __init__(self, environment: Environment, invalid_fields: dict[str, str]):
        self.environment = environment
        self.invalid_fields = invalid_fields
        lines = [f"Invalid {environment.value} configuration:"]
        lines += [f"  - {name}: {msg}" for name, msg in invalid_fields.items()]
        super().__init__("\n".join(lines))

    @classmethod
    def from_validation_error(
        cls, environment: Environment, error: ValidationError
    ) -> "ConfigurationError":
        fields = {
            ".".join(str(part) for part in err["loc"]) or "<root>": err["msg"]
            for err in error.errors()
        }
        return cls(environment, fields)


def load_settings(environment: Optional[Environment] = None) -> Settings:
    """
    Load settings for an environment.

    Args:
        environment: Which .env.<environment> file to layer in. Detected
            from MEMSESSION_ENVIRONMENT when omitted.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    environment = environment or Environment.current()
    try:
        return Settings(_env_file=environment.env_files() or None, environment=environment)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(environment, e) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    return load_settings()


def clear_settings_cache() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
