"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class AuthConfig(BaseModel):
    """HTTP Basic credentials for the play endpoint."""

    enabled: bool = Field(
        default=False,
        description="Require credentials when a torrent is not known to the engine.",
    )
    realm: str = Field(
        default="Authorization Required",
        description="Realm sent in the WWW-Authenticate challenge.",
    )
    accounts: dict[str, str] = Field(
        default_factory=dict,
        description="Username -> password map.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (engine/http/logging/auth).
    - Environment variables are handled by EnvOverrides(BaseSettings) so
      precedence stays explicit (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="torrplay", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Torrent engine (YAML section: engine.*)
    engine_base_url: str = Field(
        default="http://127.0.0.1:8090",
        validation_alias=AliasChoices(
            "engine_base_url",
            AliasPath("engine", "base_url"),
        ),
        description="Root URL of the TorrServer-compatible engine.",
    )
    engine_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "engine_timeout_seconds",
            AliasPath("engine", "timeout_seconds"),
        ),
        description="Timeout for engine API calls (stream reads are unbounded).",
    )
    engine_info_wait_seconds: float = Field(
        default=20.0,
        validation_alias=AliasChoices(
            "engine_info_wait_seconds",
            AliasPath("engine", "info_wait_seconds"),
        ),
        description="How long to poll for metadata after re-adding a stored torrent.",
    )
    engine_poll_interval_seconds: float = Field(
        default=0.5,
        validation_alias=AliasChoices(
            "engine_poll_interval_seconds",
            AliasPath("engine", "poll_interval_seconds"),
        ),
        description="Delay between metadata polls.",
    )
    engine_save_to_db: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "engine_save_to_db",
            AliasPath("engine", "save_to_db"),
        ),
        description="Ask the engine to persist torrents re-added by the gateway.",
    )

    # HTTP (YAML section: http.*)
    http_user_agent: str = Field(
        default="torrplay/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing engine requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Auth (YAML section: auth.*)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @field_validator("engine_base_url")
    @classmethod
    def _validate_engine_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("engine_base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("engine_timeout_seconds", "engine_poll_interval_seconds")
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("engine_info_wait_seconds")
    @classmethod
    def _validate_info_wait(cls, v: float) -> float:
        if v < 0:
            raise ValueError("engine_info_wait_seconds must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml.

        Account passwords are masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "engine": {
                "base_url": self.engine_base_url,
                "timeout_seconds": self.engine_timeout_seconds,
                "info_wait_seconds": self.engine_info_wait_seconds,
                "poll_interval_seconds": self.engine_poll_interval_seconds,
                "save_to_db": self.engine_save_to_db,
            },
            "http": {"user_agent": self.http_user_agent},
            "logging": {"level": self.log_level, "format": self.log_format},
            "auth": {
                "enabled": self.auth.enabled,
                "realm": self.auth.realm,
                "accounts": {user: "***" for user in self.auth.accounts},
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py reads TORRPLAY_* variables through this model, keeps only the
    values that were set and merges them over YAML/defaults before
    validating AppConfig.

    Supported env var examples (flat, explicit):
    - TORRPLAY_ENGINE_BASE_URL
    - TORRPLAY_ENGINE_INFO_WAIT_SECONDS
    - TORRPLAY_LOG_LEVEL
    - TORRPLAY_AUTH_ENABLED
    """

    model_config = SettingsConfigDict(
        env_prefix="TORRPLAY_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    engine_base_url: Optional[str] = None
    engine_timeout_seconds: Optional[float] = None
    engine_info_wait_seconds: Optional[float] = None
    engine_poll_interval_seconds: Optional[float] = None
    engine_save_to_db: Optional[bool] = None

    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    auth_enabled: Optional[bool] = None
    auth_realm: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
