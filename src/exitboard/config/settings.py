"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    project_root: Path = Field(
        default=Path(),
        description="Path to project root containing exitboard.yml",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    api_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the task REST API (provider: http)",
    )

    api_key: str | None = Field(default=None, description="API key for the task REST API")

    board_id: str | None = Field(default=None, description="Board to load from the REST API")

    ml_api_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the ML intelligence API",
    )

    ml_api_key: str | None = Field(default=None, description="X-API-Key for the ML API")

    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    rollback_on_failure: bool = Field(
        default=True,
        description="Revert optimistic moves when the store rejects them",
    )

    model_config = {
        "env_prefix": "EXITBOARD_",
    }
