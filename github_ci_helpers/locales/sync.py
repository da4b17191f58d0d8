"""Orchestrates the locale sync check for a pull request."""

import asyncio
import json
import time
from typing import Any

import structlog
from githubkit.exception import GitHubException

from github_ci_helpers.configuration.models import LocaleSyncConfig
from github_ci_helpers.github.abc import GitHubClientBase
from github_ci_helpers.github.adapter import GitHubKitAdapter
from github_ci_helpers.locales.exceptions import FileContentFetchError, LocaleFileParseError, LocaleSyncError
from github_ci_helpers.locales.files import build_locale_file_set, build_locale_file_sets, filter_json_files, validate_locale_file_sets
from github_ci_helpers.locales.keys import compare_objects
from github_ci_helpers.locales.models import (
    FailedFileContent,
    FetchedFileContent,
    FileContent,
    FileKeyDifference,
    LocaleSyncResult,
    PatchMismatch,
)
from github_ci_helpers.locales.patches import find_patch_mismatches
from github_ci_helpers.utils.github import get_error_status_code

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def fetch_file_content(github_adapter: GitHubClientBase, path: str, ref: str) -> FileContent:
    """Fetch a file at a ref, returning a failed result instead of raising on API errors."""
    try:
        content = await github_adapter.get_file_content(path, ref)
    except (GitHubException, ValueError) as e:
        logger.error(
            "Failed to fetch file content",
            file_path=path,
            ref=ref,
            status_code=get_error_status_code(e),
            error=str(e),
        )
        return FailedFileContent(path=path, ref=ref, cause=str(e) or type(e).__name__)
    return FetchedFileContent(path=path, ref=ref, content=content)


def parse_locale_file(file_content: FileContent) -> dict[str, Any]:
    """Parse fetched translation file content into a JSON object.

    Raises:
        FileContentFetchError: If the content could not be fetched.
        LocaleFileParseError: If the content is not a JSON object.
    """
    if isinstance(file_content, FailedFileContent):
        raise FileContentFetchError(file_content.path, file_content.ref, file_content.cause)
    try:
        data = json.loads(file_content.content)
    except json.JSONDecodeError as e:
        raise LocaleFileParseError(file_content.path, file_content.ref, str(e)) from e
    if not isinstance(data, dict):
        raise LocaleFileParseError(file_content.path, file_content.ref, f"top-level value is a {type(data).__name__}")
    return data


async def compare_file_between_branches(
    github_adapter: GitHubClientBase,
    path: str,
    base_branch: str,
    target_branch: str,
) -> FileKeyDifference:
    """Return the dotted keys of a translation file that are new or changed on the target branch."""
    base_content, target_content = await asyncio.gather(
        fetch_file_content(github_adapter, path, base_branch),
        fetch_file_content(github_adapter, path, target_branch),
    )
    keys = compare_objects(parse_locale_file(base_content), parse_locale_file(target_content))
    logger.info(
        "Compared translation file between branches",
        file_path=path,
        base_branch=base_branch,
        target_branch=target_branch,
        changed_keys=keys,
    )
    return FileKeyDifference(file_path=path, base_branch=base_branch, target_branch=target_branch, keys=keys)


async def compare_files_between_branches(
    github_adapter: GitHubClientBase,
    paths: list[str],
    base_branch: str,
    target_branch: str,
) -> tuple[list[FileKeyDifference], list[dict[str, Any]]]:
    """Compare every file concurrently and wait for all of them.

    Returns the differences of the files that could be compared and one error
    entry for each file that could not.
    """
    outcomes = await asyncio.gather(
        *(compare_file_between_branches(github_adapter, path, base_branch, target_branch) for path in paths),
        return_exceptions=True,
    )
    differences: list[FileKeyDifference] = []
    errors: list[dict[str, Any]] = []
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, LocaleSyncError):
            errors.append({"file_path": path, "error": str(outcome)})
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            differences.append(outcome)
    return differences, errors


async def check_locale_sync(
    github_adapter: GitHubClientBase,
    pull_request_number: int,
    base_branch: str,
    target_branch: str,
    baseline_locale: str,
    locales: list[str],
    validate_patches: bool = False,
) -> LocaleSyncResult:
    """Check that a pull request's translation files are in sync with the baseline locale.

    Raises:
        NoBaselineFilesError: If the pull request changes no baseline locale files.
        LocaleOutOfSyncError: If any locale changes a different set of files than the baseline.
    """
    pull_request_files = await github_adapter.list_files_in_pull_request(pull_request_number)
    json_file_paths = filter_json_files([file.filename for file in pull_request_files])
    logger.info("JSON files changed in pull request", pull_request_number=pull_request_number, file_paths=json_file_paths)

    baseline = build_locale_file_set(baseline_locale, json_file_paths)
    locale_file_sets = build_locale_file_sets(locales, json_file_paths)
    validate_locale_file_sets(baseline, locale_file_sets)

    patch_mismatches: list[PatchMismatch] = []
    if validate_patches:
        patches_by_path = {file.filename: getattr(file, "patch", None) for file in pull_request_files}
        patch_mismatches = find_patch_mismatches(baseline, locale_file_sets, patches_by_path)

    differences, errors = await compare_files_between_branches(github_adapter, baseline.file_paths, base_branch, target_branch)
    return LocaleSyncResult(
        baseline=baseline,
        locales=locale_file_sets,
        differences=differences,
        patch_mismatches=patch_mismatches,
        errors=errors,
    )


async def run_locale_sync_workflow(config: LocaleSyncConfig) -> LocaleSyncResult:
    """Run the check-locale-sync workflow against the configured repository and pull request."""
    github_adapter = await GitHubKitAdapter.create(
        repo=config.repo,
        github_auth_type=config.github_authentication_type,
        github_pat_token=config.github_pat_token,
        github_app_id=config.github_app_id,
        github_app_private_key_path=config.github_app_private_key_path,
        github_app_installation_id=config.github_app_installation_id,
        github_api_url=config.github_api_url,
    )

    start_time = time.time()
    logger.info(
        "Checking locale sync",
        repo=config.repo,
        pull_request_number=config.pull_request_number,
        base_branch=config.base_branch,
        target_branch=config.target_branch,
        baseline_locale=config.baseline_locale,
        locales=config.locales,
    )
    result = await check_locale_sync(
        github_adapter,
        pull_request_number=config.pull_request_number,
        base_branch=config.base_branch,
        target_branch=config.target_branch,
        baseline_locale=config.baseline_locale,
        locales=config.locales,
        validate_patches=config.validate_patches,
    )
    logger.info(
        "Checked locale sync",
        duration=round(time.time() - start_time, 2),
        compared_file_count=len(result.differences),
        error_count=len(result.errors),
        patch_mismatch_count=len(result.patch_mismatches),
    )
    return result
