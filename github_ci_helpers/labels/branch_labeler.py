"""Orchestrates labeling of open pull requests whose commits are already in a branch."""

import time

import structlog
from githubkit.exception import GitHubException

from github_ci_helpers.configuration.models import BranchLabelerConfig
from github_ci_helpers.github.abc import GitHubClientBase
from github_ci_helpers.github.adapter import GitHubKitAdapter
from github_ci_helpers.labels.ancestry import should_show_branch_label
from github_ci_helpers.labels.exceptions import BranchLabelerRequestError
from github_ci_helpers.labels.models import BranchLabelerResult, BranchLabelResult, CommitModel, LabelAction, PullRequestModel
from github_ci_helpers.labels.reconcile import apply_branch_label_action, decide_branch_label_action, ensure_label_exists, has_label
from github_ci_helpers.utils.github import get_error_status_code

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _request_error(operation: str, exc: Exception) -> BranchLabelerRequestError:
    status_code = get_error_status_code(exc)
    logger.error(f"{operation} request failed", status_code=status_code, error=str(exc))
    return BranchLabelerRequestError(operation, status_code, str(exc))


async def ensure_branch_label(github_adapter: GitHubClientBase, label_name: str, label_color: str, label_description: str | None = None) -> None:
    """Make sure the branch label exists in the repository before labeling pull requests."""
    try:
        await ensure_label_exists(github_adapter, name=label_name, color=label_color, description=label_description)
    except (GitHubException, ValueError) as exc:
        raise _request_error("Labels", exc) from exc


async def get_open_pull_requests(github_adapter: GitHubClientBase) -> list[PullRequestModel]:
    """Fetch the open pull requests of the repository."""
    try:
        pull_requests = await github_adapter.list_pull_requests(state="open")
    except GitHubException as exc:
        raise _request_error("Open PRs", exc) from exc
    open_pull_requests = [PullRequestModel.from_github(pull_request) for pull_request in pull_requests]
    logger.info("Open PRs", pull_requests=[{"number": pr.number, "title": pr.title} for pr in open_pull_requests])
    return open_pull_requests


async def get_branch_commits(github_adapter: GitHubClientBase, branch: str, max_commits: int | None = None) -> list[CommitModel]:
    """Fetch the most recent commits of a branch."""
    try:
        raw_commits = await github_adapter.list_commits(sha=branch, max_commits=max_commits)
    except GitHubException as exc:
        raise _request_error("Branch commit", exc) from exc
    commits = [CommitModel.from_github(raw_commit) for raw_commit in raw_commits]
    logger.info("Branch commits", branch=branch, commits=[{"sha": c.sha, "author": c.author} for c in commits])
    return commits


async def get_pull_request_commits(github_adapter: GitHubClientBase, pull_request_number: int) -> list[CommitModel]:
    """Fetch every commit of a pull request."""
    try:
        raw_commits = await github_adapter.list_pull_request_commits(pull_request_number)
    except GitHubException as exc:
        raise _request_error("PR commit", exc) from exc
    commits = [CommitModel.from_github(raw_commit) for raw_commit in raw_commits]
    logger.info("PR commits", pull_request_number=pull_request_number, commits=[{"sha": c.sha, "author": c.author} for c in commits])
    return commits


async def label_pull_request(
    github_adapter: GitHubClientBase,
    pull_request: PullRequestModel,
    branch_commits: list[CommitModel],
    label_name: str,
) -> BranchLabelResult:
    """Add or remove the branch label on one pull request based on its commit ancestry."""
    pr_commits = await get_pull_request_commits(github_adapter, pull_request.number)
    show_branch_label = should_show_branch_label(pr_commits, branch_commits)
    action = decide_branch_label_action(show_branch_label, has_label(pull_request, label_name))
    await apply_branch_label_action(github_adapter, pull_request.number, label_name, action)
    return BranchLabelResult(pull_request_number=pull_request.number, show_branch_label=show_branch_label, action=action)


async def label_branch_pull_requests(
    github_adapter: GitHubClientBase,
    target_branch: str,
    label_name: str,
    label_color: str,
    label_description: str | None = None,
    branch_commit_limit: int | None = None,
) -> BranchLabelerResult:
    """Reconcile the branch label on every open pull request.

    Raises:
        BranchLabelerRequestError: If setting up the label or listing pull requests or commits fails. No further
            pull requests are processed.
    """
    await ensure_branch_label(github_adapter, label_name, label_color, label_description)
    pull_requests = await get_open_pull_requests(github_adapter)
    branch_commits = await get_branch_commits(github_adapter, target_branch, max_commits=branch_commit_limit)

    results: list[BranchLabelResult] = []
    for pull_request in pull_requests:
        results.append(await label_pull_request(github_adapter, pull_request, branch_commits, label_name))
    return BranchLabelerResult(results=results)


async def run_branch_labeler_workflow(config: BranchLabelerConfig) -> BranchLabelerResult:
    """Run the label-branch-prs workflow against the configured repository."""
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
    logger.info("Labeling pull requests contained in branch", repo=config.repo, target_branch=config.target_branch, label_name=config.label_name)
    result = await label_branch_pull_requests(
        github_adapter,
        target_branch=config.target_branch,
        label_name=config.label_name,
        label_color=config.label_color,
        label_description=config.label_description,
        branch_commit_limit=config.branch_commit_limit,
    )
    logger.info(
        "Labeled pull requests contained in branch",
        duration=round(time.time() - start_time, 2),
        pull_request_count=len(result.results),
        labels_added=result.pull_requests_with_action(LabelAction.ADD),
        labels_removed=result.pull_requests_with_action(LabelAction.REMOVE),
    )
    return result
