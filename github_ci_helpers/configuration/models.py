"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from github_ci_helpers.utils.constants import DEFAULT_BASELINE_LOCALE, DEFAULT_BRANCH_COMMIT_LIMIT, DEFAULT_LABEL_COLOR, DEFAULT_LOCALES


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


@dataclass
class BaseConfig:
    """Configuration shared by every command."""

    debug: bool
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: str | None
    github_app_private_key_path: Path | None
    github_app_installation_id: str | None
    repo: str


@dataclass
class LocaleSyncConfig(BaseConfig):
    """Configuration for the check-locale-sync command."""

    pull_request_number: int
    base_branch: str
    target_branch: str
    baseline_locale: str = DEFAULT_BASELINE_LOCALE
    locales: list[str] = field(default_factory=lambda: list(DEFAULT_LOCALES))
    validate_patches: bool = False


@dataclass
class BranchLabelerConfig(BaseConfig):
    """Configuration for the label-branch-prs command."""

    target_branch: str
    label_name: str
    label_color: str = DEFAULT_LABEL_COLOR
    label_description: str | None = None
    branch_commit_limit: int = DEFAULT_BRANCH_COMMIT_LIMIT
