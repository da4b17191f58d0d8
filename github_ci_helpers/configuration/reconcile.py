"""Reconciles configuration between CLI arguments and environment variables.

CLI arguments take precedence. Anything not given on the command line falls
back to the environment (or a `.env` file) through `settings`.
"""

from pathlib import Path
from typing import Any

import structlog

from github_ci_helpers.configuration.env import settings
from github_ci_helpers.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from github_ci_helpers.configuration.models import (
    BaseConfig,
    BranchLabelerConfig,
    GitHubAuthenticationType,
    LocaleSyncConfig,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _prefer_cli(cli_value: Any, env_value: Any) -> Any:
    """Return the CLI value unless it is empty, otherwise the environment value."""
    if cli_value is None or cli_value == "":
        return env_value
    return cli_value


def _parse_locales(locales: str | list[str] | None) -> list[str]:
    """Turn a comma-separated locale string (or list) into a clean list of locale codes."""
    if not locales:
        return []
    if isinstance(locales, str):
        locales = locales.split(",")
    return [locale.strip() for locale in locales if locale.strip()]


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | str | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | str | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | str | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | str | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither of PAT and App configurations are defined.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    if github_pat_token and (github_app_id or github_app_private_key_path or github_app_installation_id):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path and github_app_installation_id:
        return GitHubAuthenticationType.APP
    elif github_app_id or github_app_private_key_path or github_app_installation_id:
        missing_settings: list[str] = []
        if not github_app_id:
            missing_settings.append("GitHub App ID (command line option github_app_id, environment variable GITHUB_APP_ID)")
        if not github_app_private_key_path:
            missing_settings.append(
                "GitHub App private key path (command line option github_app_private_key_path, environment variable GITHUB_APP_PRIVATE_KEY_PATH)"
            )
        if not github_app_installation_id:
            missing_settings.append(
                "GitHub App installation ID (command line option github_app_installation_id, environment variable GITHUB_APP_INSTALLATION_ID)"
            )
        raise GitHubAuthenticationConfigurationUndefinedError(
            "Incomplete GitHub App configuration - missing settings include " + ", ".join(missing_settings)
        )
    else:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
        )


async def reconcile_base_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_github_app_id: str | None,
    cli_github_app_private_key_path: Path | None,
    cli_github_app_installation_id: str | None,
    cli_repo: str | None,
) -> BaseConfig:
    """Reconciles the configuration shared by every command."""
    debug = cli_debug or settings.DEBUG
    github_api_url = _prefer_cli(cli_github_api_url, settings.GITHUB_API_URL)
    github_pat_token = _prefer_cli(cli_github_pat_token, settings.GITHUB_PAT_TOKEN)
    github_app_id = _prefer_cli(cli_github_app_id, settings.GITHUB_APP_ID)
    github_app_private_key_path = _prefer_cli(cli_github_app_private_key_path, settings.GITHUB_APP_PRIVATE_KEY_PATH)
    github_app_installation_id = _prefer_cli(cli_github_app_installation_id, settings.GITHUB_APP_INSTALLATION_ID)
    repo = _prefer_cli(cli_repo, settings.REPO)

    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    if not repo:
        raise RequiredConfigurationElementError(name="Repository", cli_name="repo", env_name="REPO")

    return BaseConfig(
        debug=debug,
        github_api_url=github_api_url,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        repo=repo,
    )


async def reconcile_locale_sync_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_github_app_id: str | None,
    cli_github_app_private_key_path: Path | None,
    cli_github_app_installation_id: str | None,
    cli_repo: str | None,
    cli_pull_request_number: int | None,
    cli_base_branch: str | None,
    cli_target_branch: str | None,
    cli_baseline_locale: str | None = None,
    cli_locales: str | list[str] | None = None,
    cli_validate_patches: bool = False,
) -> LocaleSyncConfig:
    """Reconciles the configuration for the check-locale-sync command."""
    base_config = await reconcile_base_configuration(
        cli_debug=cli_debug,
        cli_github_api_url=cli_github_api_url,
        cli_github_pat_token=cli_github_pat_token,
        cli_github_app_id=cli_github_app_id,
        cli_github_app_private_key_path=cli_github_app_private_key_path,
        cli_github_app_installation_id=cli_github_app_installation_id,
        cli_repo=cli_repo,
    )

    pull_request_number = _prefer_cli(cli_pull_request_number, settings.PULL_REQUEST_NUMBER)
    if pull_request_number is None:
        raise RequiredConfigurationElementError(name="Pull request number", cli_name="pull_request_number", env_name="PULL_REQUEST_NUMBER")

    base_branch = _prefer_cli(cli_base_branch, settings.BASE_BRANCH)
    if not base_branch:
        raise RequiredConfigurationElementError(name="Base branch", cli_name="base_branch", env_name="BASE_BRANCH")

    target_branch = _prefer_cli(cli_target_branch, settings.TARGET_BRANCH)
    if not target_branch:
        raise RequiredConfigurationElementError(name="Target branch", cli_name="target_branch", env_name="TARGET_BRANCH")

    baseline_locale = _prefer_cli(cli_baseline_locale, settings.BASELINE_LOCALE)
    locales = [locale for locale in _parse_locales(_prefer_cli(cli_locales, settings.LOCALES)) if locale != baseline_locale]
    if not locales:
        raise RequiredConfigurationElementError(name="Locales", cli_name="locales", env_name="LOCALES")

    logger.debug(
        "Reconciled locale sync configuration",
        repo=base_config.repo,
        pull_request_number=pull_request_number,
        base_branch=base_branch,
        target_branch=target_branch,
        baseline_locale=baseline_locale,
        locales=locales,
    )
    return LocaleSyncConfig(
        **vars(base_config),
        pull_request_number=int(pull_request_number),
        base_branch=base_branch,
        target_branch=target_branch,
        baseline_locale=baseline_locale,
        locales=locales,
        validate_patches=cli_validate_patches or settings.VALIDATE_PATCHES,
    )


async def reconcile_branch_labeler_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_github_app_id: str | None,
    cli_github_app_private_key_path: Path | None,
    cli_github_app_installation_id: str | None,
    cli_repo: str | None,
    cli_target_branch: str | None,
    cli_label_name: str | None,
    cli_label_color: str | None = None,
    cli_label_description: str | None = None,
    cli_branch_commit_limit: int | None = None,
) -> BranchLabelerConfig:
    """Reconciles the configuration for the label-branch-prs command."""
    base_config = await reconcile_base_configuration(
        cli_debug=cli_debug,
        cli_github_api_url=cli_github_api_url,
        cli_github_pat_token=cli_github_pat_token,
        cli_github_app_id=cli_github_app_id,
        cli_github_app_private_key_path=cli_github_app_private_key_path,
        cli_github_app_installation_id=cli_github_app_installation_id,
        cli_repo=cli_repo,
    )

    target_branch = _prefer_cli(cli_target_branch, settings.TARGET_BRANCH)
    if not target_branch:
        raise RequiredConfigurationElementError(name="Target branch", cli_name="target_branch", env_name="TARGET_BRANCH")

    label_name = _prefer_cli(cli_label_name, settings.LABEL_NAME)
    if not label_name:
        raise RequiredConfigurationElementError(name="Label name", cli_name="label_name", env_name="LABEL_NAME")

    label_color = _prefer_cli(cli_label_color, settings.LABEL_COLOR).lstrip("#")

    return BranchLabelerConfig(
        **vars(base_config),
        target_branch=target_branch,
        label_name=label_name,
        label_color=label_color,
        label_description=_prefer_cli(cli_label_description, settings.LABEL_DESCRIPTION),
        branch_commit_limit=_prefer_cli(cli_branch_commit_limit, settings.BRANCH_COMMIT_LIMIT),
    )
