"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from githubkit.exception import GitHubException
from typer import Option
from typing_extensions import Annotated

from github_ci_helpers.configuration.driver import get_branch_labeler_config, get_locale_sync_config
from github_ci_helpers.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from github_ci_helpers.labels.branch_labeler import run_branch_labeler_workflow
from github_ci_helpers.labels.exceptions import BranchLabelerRequestError
from github_ci_helpers.labels.models import LabelAction
from github_ci_helpers.locales.exceptions import LocaleOutOfSyncError, LocaleSyncError
from github_ci_helpers.locales.sync import run_locale_sync_workflow
from github_ci_helpers.utils.github import get_error_status_code

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="CI helpers for translation files and branch labels.")

RepoOption = Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo).")]
GitHubApiUrlOption = Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")]
GitHubPatTokenOption = Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")]
GitHubAppIdOption = Annotated[str | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")]
GitHubAppPrivateKeyPathOption = Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")]
GitHubAppInstallationIdOption = Annotated[str | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")]
DebugOption = Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")]


def configure_logging(debug: bool) -> None:
    """Only emit debug log events when debug mode is enabled."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO))


@typer_app.command(name="check-locale-sync")
def check_locale_sync_cli(
    pull_request_number: Annotated[int | None, Option(envvar="PULL_REQUEST_NUMBER", help="Number of the pull request to check.")] = None,
    base_branch: Annotated[str | None, Option(envvar="BASE_BRANCH", help="Branch holding the translations before the change.")] = None,
    target_branch: Annotated[str | None, Option(envvar="TARGET_BRANCH", help="Branch holding the changed translations.")] = None,
    baseline_locale: Annotated[str | None, Option(envvar="BASELINE_LOCALE", help="Locale treated as the source of truth.")] = None,
    locales: Annotated[str | None, Option(envvar="LOCALES", help="Comma-separated locales that must follow the baseline.")] = None,
    validate_patches: Annotated[
        bool, Option(envvar="VALIDATE_PATCHES", help="Also check that translated files' patches touch the same keys as the baseline's.")
    ] = False,
    repo: RepoOption = None,
    github_api_url: GitHubApiUrlOption = None,
    github_pat_token: GitHubPatTokenOption = None,
    github_app_id: GitHubAppIdOption = None,
    github_app_private_key_path: GitHubAppPrivateKeyPathOption = None,
    github_app_installation_id: GitHubAppInstallationIdOption = None,
    debug: DebugOption = False,
) -> None:
    """Checks that the translation files changed in a pull request are in sync with the baseline locale."""
    try:
        config = get_locale_sync_config(
            debug=debug,
            github_api_url=github_api_url,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            repo=repo,
            pull_request_number=pull_request_number,
            base_branch=base_branch,
            target_branch=target_branch,
            baseline_locale=baseline_locale,
            locales=locales,
            validate_patches=validate_patches,
        )
    except (GitHubAuthenticationConfigurationUndefinedError, RequiredConfigurationElementError, ValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    configure_logging(config.debug)

    try:
        result = asyncio.run(run_locale_sync_workflow(config))
    except LocaleOutOfSyncError as e:
        typer.echo(f"Locale files out of sync: {', '.join(e.locales)}", err=True)
        raise typer.Exit(1)
    except LocaleSyncError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitHubException as e:
        typer.echo(f"GitHub request failed (status {get_error_status_code(e)}): {e}", err=True)
        raise typer.Exit(1)

    for difference in result.differences:
        if difference.keys:
            typer.echo(f"{difference.file_path}: {len(difference.keys)} key(s) added or changed on {difference.target_branch}")
            for key in difference.keys:
                typer.echo(f"  - {key}")
        else:
            typer.echo(f"{difference.file_path}: no keys added or changed on {difference.target_branch}")

    for mismatch in result.patch_mismatches:
        typer.echo(
            f"{mismatch.locale}/{mismatch.file_name}: patch keys differ from {config.baseline_locale} "
            f"(expected added={mismatch.expected.added} deleted={mismatch.expected.deleted}, "
            f"got added={mismatch.actual.added} deleted={mismatch.actual.deleted})",
            err=True,
        )

    if result.errors:
        typer.echo("Error(s) encountered while comparing translation files:", err=True)
        for err in result.errors:
            typer.echo(f"  {err['file_path']}: {err['error']}", err=True)

    if not result.succeeded:
        sys.exit(1)


@typer_app.command(name="label-branch-prs")
def label_branch_prs_cli(
    target_branch: Annotated[str | None, Option(envvar="TARGET_BRANCH", help="Branch whose commits decide the label.")] = None,
    label_name: Annotated[str | None, Option(envvar="LABEL_NAME", help="Name of the branch label.")] = None,
    label_color: Annotated[str | None, Option(envvar="LABEL_COLOR", help="Hex color used if the label has to be created.")] = None,
    label_description: Annotated[str | None, Option(envvar="LABEL_DESCRIPTION", help="Description used if the label has to be created.")] = None,
    branch_commit_limit: Annotated[
        int | None, Option(envvar="BRANCH_COMMIT_LIMIT", help="Number of most recent branch commits to compare against.")
    ] = None,
    repo: RepoOption = None,
    github_api_url: GitHubApiUrlOption = None,
    github_pat_token: GitHubPatTokenOption = None,
    github_app_id: GitHubAppIdOption = None,
    github_app_private_key_path: GitHubAppPrivateKeyPathOption = None,
    github_app_installation_id: GitHubAppInstallationIdOption = None,
    debug: DebugOption = False,
) -> None:
    """Labels open pull requests whose commits are all contained in the target branch."""
    try:
        config = get_branch_labeler_config(
            debug=debug,
            github_api_url=github_api_url,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            repo=repo,
            target_branch=target_branch,
            label_name=label_name,
            label_color=label_color,
            label_description=label_description,
            branch_commit_limit=branch_commit_limit,
        )
    except (GitHubAuthenticationConfigurationUndefinedError, RequiredConfigurationElementError, ValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    configure_logging(config.debug)

    try:
        result = asyncio.run(run_branch_labeler_workflow(config))
    except BranchLabelerRequestError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitHubException as e:
        typer.echo(f"GitHub request failed (status {get_error_status_code(e)}): {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Checked {len(result.results)} open pull request(s) against {config.target_branch}")
    typer.echo(f"  Label added: {result.pull_requests_with_action(LabelAction.ADD)}")
    typer.echo(f"  Label removed: {result.pull_requests_with_action(LabelAction.REMOVE)}")


if __name__ == "__main__":
    typer_app()
