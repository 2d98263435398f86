"""
Process configuration using Pydantic Settings.

Loads runtime settings from environment variables and a .env file. The
settings object is created once at process start by ``load_settings`` and
passed explicitly into the engine.
"""

from typing import Any, Literal

from pydantic import AliasChoices, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from task_assistant.shared.domain.exceptions import fatal_error


class Settings(BaseSettings):
    """Runtime settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_ASSISTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Runtime
    run_mode: Literal["action", "app", "local"] = Field(
        default="action",
        description="Execution mode (action/app/local)",
    )
    app_env: Literal["development", "production", "test"] = Field(
        default="production",
        description="Environment (development/production/test)",
    )
    debug: bool = Field(default=False, description="Include causes and stacks in error output")
    log_level: str = Field(default="INFO", description="Logging level")

    # GitHub
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "TASK_ASSISTANT_GITHUB_TOKEN"),
        description="GitHub token (required in action mode)",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL", "TASK_ASSISTANT_GITHUB_API_URL"),
        description="GitHub REST API base URL",
    )
    event_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_EVENT_PATH", "TASK_ASSISTANT_EVENT_PATH"),
        description="Path of the triggering event payload",
    )
    repository: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPOSITORY", "TASK_ASSISTANT_REPOSITORY"),
        description="owner/repo slug of the triggering repository",
    )
    http_timeout: float = Field(default=30.0, description="Timeout for GitHub API calls in seconds")

    # Telemetry
    telemetry_enabled: bool = Field(default=True, description="Global telemetry switch")
    telemetry_root: str | None = Field(
        default=None,
        description="Overrides the telemetry path from the configuration document",
    )

    # Optional JSON configuration overriding the document sections
    track_config: dict[str, Any] | None = Field(default=None, description="JSON tracks section")
    milestone_rules: dict[str, Any] | None = Field(default=None, description="JSON milestone rules")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @model_validator(mode="after")
    def _validate_token(self) -> "Settings":
        """Fail fast: action mode cannot talk to GitHub without a token."""
        if self.run_mode == "action" and not self.github_token:
            raise ValueError("Missing GITHUB_TOKEN. Required when TASK_ASSISTANT_RUN_MODE=action.")
        return self

    def config_overrides(self) -> dict[str, Any]:
        """Document sections supplied through the environment."""
        overrides: dict[str, Any] = {}
        if self.track_config is not None:
            overrides["tracks"] = self.track_config
        if self.milestone_rules is not None:
            overrides["milestone_rules"] = self.milestone_rules
        return overrides


def load_settings(**values: Any) -> Settings:
    """
    Read and validate the process environment.

    Raises:
        EngineError: fatal severity, listing every invalid variable
    """
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = [f"- {'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}" for err in e.errors()]
        raise fatal_error(
            "Environment validation failed:\n" + "\n".join(problems),
            cause=e,
        ) from e
    except SettingsError as e:
        raise fatal_error(f"Environment validation failed: {e}", cause=e) from e
