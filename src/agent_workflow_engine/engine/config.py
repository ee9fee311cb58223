"""Configuration for the workflow engine.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Workflow-related variables use a `WORKFLOW_` prefix to avoid collisions with
other tools sharing the same environment.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings for the engine, CLI and HTTP adapter.

    Environment variables:
    - LOG_LEVEL                     (optional)
    - WORKFLOW_DEFAULT_MAX_RETRIES  (optional)
    - WORKFLOW_DEFAULT_BACKOFF_MS   (optional)
    - WORKFLOW_CONFERENCE_NAME      (optional)
    - WORKFLOW_CONFERENCE_DATE      (optional)
    - WORKFLOW_CORS_ORIGINS         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `EngineSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    default_max_retries: int = Field(
        default=0,
        ge=0,
        validation_alias="WORKFLOW_DEFAULT_MAX_RETRIES",
        description="Retries applied to steps that declare no retry policy",
    )
    default_backoff_ms: int = Field(
        default=1000,
        gt=0,
        validation_alias="WORKFLOW_DEFAULT_BACKOFF_MS",
        description="Base backoff (ms) for steps that declare no retry policy",
    )

    conference_name: str = Field(
        default="Cloudflare Connect 2024",
        validation_alias="WORKFLOW_CONFERENCE_NAME",
        description="Conference used by the follow-up campaign when none is given",
    )
    conference_date: str = Field(
        default="2024-12-10",
        validation_alias="WORKFLOW_CONFERENCE_DATE",
        description="Conference date (ISO format) used by the follow-up campaign",
    )

    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="WORKFLOW_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
