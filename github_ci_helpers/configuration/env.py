"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_ci_helpers.utils.constants import (
    DEFAULT_BASELINE_LOCALE,
    DEFAULT_BRANCH_COMMIT_LIMIT,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LOCALES,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    REPO: str | None = None

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: str | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: str | None = None

    # Locale sync settings
    PULL_REQUEST_NUMBER: int | None = None
    BASE_BRANCH: str | None = None
    TARGET_BRANCH: str | None = None
    BASELINE_LOCALE: str = DEFAULT_BASELINE_LOCALE
    LOCALES: str = ",".join(DEFAULT_LOCALES)
    VALIDATE_PATCHES: bool = False

    # Branch label settings
    LABEL_NAME: str | None = None
    LABEL_COLOR: str = DEFAULT_LABEL_COLOR
    LABEL_DESCRIPTION: str | None = None
    BRANCH_COMMIT_LIMIT: int = DEFAULT_BRANCH_COMMIT_LIMIT


settings = Settings()
