"""Pydantic Settings model for the workflow runner environment."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings provided by the workflow runner.

    Only the step output file is read here. Command inputs such as the token,
    API URL, event path and debug flag reach the CLI through typer option
    envvars.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    # Workflow runner files
    GITHUB_OUTPUT: Path | None = None


def get_settings() -> Settings:
    """Read the runner environment as it is right now."""
    return Settings()
