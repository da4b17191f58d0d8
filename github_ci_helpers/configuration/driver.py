"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio
from pathlib import Path

from github_ci_helpers.configuration import reconcile
from github_ci_helpers.configuration.models import BranchLabelerConfig, LocaleSyncConfig


def get_locale_sync_config(
    debug: bool = False,
    github_api_url: str | None = None,
    github_pat_token: str | None = None,
    github_app_id: str | None = None,
    github_app_private_key_path: Path | None = None,
    github_app_installation_id: str | None = None,
    repo: str | None = None,
    pull_request_number: int | None = None,
    base_branch: str | None = None,
    target_branch: str | None = None,
    baseline_locale: str | None = None,
    locales: str | None = None,
    validate_patches: bool = False,
) -> LocaleSyncConfig:
    """Synchronously get the reconciled check-locale-sync configuration."""
    return asyncio.run(
        reconcile.reconcile_locale_sync_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_pat_token=github_pat_token,
            cli_github_app_id=github_app_id,
            cli_github_app_private_key_path=github_app_private_key_path,
            cli_github_app_installation_id=github_app_installation_id,
            cli_repo=repo,
            cli_pull_request_number=pull_request_number,
            cli_base_branch=base_branch,
            cli_target_branch=target_branch,
            cli_baseline_locale=baseline_locale,
            cli_locales=locales,
            cli_validate_patches=validate_patches,
        )
    )


def get_branch_labeler_config(
    debug: bool = False,
    github_api_url: str | None = None,
    github_pat_token: str | None = None,
    github_app_id: str | None = None,
    github_app_private_key_path: Path | None = None,
    github_app_installation_id: str | None = None,
    repo: str | None = None,
    target_branch: str | None = None,
    label_name: str | None = None,
    label_color: str | None = None,
    label_description: str | None = None,
    branch_commit_limit: int | None = None,
) -> BranchLabelerConfig:
    """Synchronously get the reconciled label-branch-prs configuration."""
    return asyncio.run(
        reconcile.reconcile_branch_labeler_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_pat_token=github_pat_token,
            cli_github_app_id=github_app_id,
            cli_github_app_private_key_path=github_app_private_key_path,
            cli_github_app_installation_id=github_app_installation_id,
            cli_repo=repo,
            cli_target_branch=target_branch,
            cli_label_name=label_name,
            cli_label_color=label_color,
            cli_label_description=label_description,
            cli_branch_commit_limit=branch_commit_limit,
        )
    )
