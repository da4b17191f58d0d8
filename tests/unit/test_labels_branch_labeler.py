"""Unit tests for the labels.branch_labeler module."""

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from githubkit.exception import GitHubException, RequestFailed

from github_ci_helpers.configuration.models import BranchLabelerConfig, GitHubAuthenticationType
from github_ci_helpers.labels.branch_labeler import (
    get_branch_commits,
    label_branch_pull_requests,
    run_branch_labeler_workflow,
)
from github_ci_helpers.labels.exceptions import BranchLabelerRequestError
from github_ci_helpers.labels.models import LabelAction


def raw_commit(sha: str, *parents: str) -> dict[str, Any]:
    """Build raw commit JSON as returned by the GitHub commits endpoints."""
    return {"sha": sha, "commit": {"author": {"name": "Jane Doe"}}, "parents": [{"sha": parent} for parent in parents]}


def raw_pull_request(number: int, *labels: str) -> SimpleNamespace:
    """Build a pull request object shaped like githubkit's."""
    return SimpleNamespace(
        number=number,
        title=f"PR {number}",
        labels=[SimpleNamespace(name=label) for label in labels],
        commits_url=f"https://api.github.com/repos/owner/repo/pulls/{number}/commits",
    )


@pytest.fixture
def adapter() -> AsyncMock:
    """Mock adapter with three open pull requests against a staging branch.

    PR 1 was merged into staging and is unlabeled, PR 2 is not in staging but
    carries the label, and PR 3 is in staging and already labeled.
    """
    mock_adapter = AsyncMock()
    mock_adapter.list_labels.return_value = [SimpleNamespace(name="in-staging")]
    mock_adapter.list_pull_requests.return_value = [
        raw_pull_request(1),
        raw_pull_request(2, "in-staging"),
        raw_pull_request(3, "in-staging", "bug"),
    ]
    mock_adapter.list_commits.return_value = [
        raw_commit("m1", "s0", "c1b"),
        raw_commit("c1a", "s0"),
        raw_commit("c3", "c1a"),
    ]
    pr_commits = {
        1: [raw_commit("c1a"), raw_commit("c1b")],
        2: [raw_commit("c2")],
        3: [raw_commit("c3")],
    }
    mock_adapter.list_pull_request_commits.side_effect = lambda number: pr_commits[number]
    return mock_adapter


@pytest.mark.asyncio
async def test_label_branch_pull_requests(adapter: AsyncMock) -> None:
    """Test that labels are added and removed according to commit containment."""
    result = await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16", branch_commit_limit=100)

    assert result.pull_requests_with_action(LabelAction.ADD) == [1]
    assert result.pull_requests_with_action(LabelAction.REMOVE) == [2]
    assert result.pull_requests_with_action(LabelAction.NOOP) == [3]
    adapter.list_commits.assert_awaited_once_with(sha="staging", max_commits=100)
    adapter.add_labels_to_issue.assert_awaited_once_with(1, ["in-staging"])
    adapter.remove_label_from_issue.assert_awaited_once_with(2, "in-staging")
    adapter.create_label.assert_not_awaited()


@pytest.mark.asyncio
async def test_label_branch_pull_requests_is_idempotent(adapter: AsyncMock) -> None:
    """Test that a second run against the updated labels changes nothing."""
    adapter.list_pull_requests.return_value = [
        raw_pull_request(1, "in-staging"),
        raw_pull_request(2),
        raw_pull_request(3, "in-staging"),
    ]

    result = await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16")

    assert all(outcome.action == LabelAction.NOOP for outcome in result.results)
    adapter.add_labels_to_issue.assert_not_awaited()
    adapter.remove_label_from_issue.assert_not_awaited()


@pytest.mark.asyncio
async def test_label_branch_pull_requests_creates_missing_label(adapter: AsyncMock) -> None:
    """Test that the label is created before any pull request is labeled."""
    adapter.list_labels.return_value = []
    await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16", label_description="Merged into staging")
    adapter.create_label.assert_awaited_once_with(name="in-staging", color="0e8a16", description="Merged into staging")


@pytest.mark.asyncio
async def test_label_branch_pull_requests_stops_on_commit_listing_failure(adapter: AsyncMock) -> None:
    """Test that a failed pull request commit listing stops the run."""
    adapter.list_pull_request_commits.side_effect = GitHubException("Server Error")

    with pytest.raises(BranchLabelerRequestError, match="PR commit request failed"):
        await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16")

    adapter.add_labels_to_issue.assert_not_awaited()
    adapter.remove_label_from_issue.assert_not_awaited()


@pytest.mark.asyncio
async def test_label_branch_pull_requests_wraps_label_listing_failure(adapter: AsyncMock) -> None:
    """Test that a failed label listing is reported like the other listing failures."""
    response = MagicMock()
    response.status_code = 500
    adapter.list_labels.side_effect = RequestFailed(response)

    with pytest.raises(BranchLabelerRequestError) as exc_info:
        await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16")

    assert exc_info.value.operation == "Labels"
    assert exc_info.value.status_code == 500
    adapter.list_pull_requests.assert_not_awaited()


@pytest.mark.asyncio
async def test_label_branch_pull_requests_wraps_label_creation_failure(adapter: AsyncMock) -> None:
    """Test that a rejected label creation stops the run with a request error."""
    adapter.list_labels.return_value = []
    adapter.create_label.side_effect = ValueError("GitHub 422 error in create_label: Validation Failed")

    with pytest.raises(BranchLabelerRequestError, match="Validation Failed"):
        await label_branch_pull_requests(adapter, "staging", "in-staging", "0e8a16")


@pytest.mark.asyncio
async def test_get_branch_commits_failure() -> None:
    """Test that a failed branch commit listing is wrapped."""
    mock_adapter = AsyncMock()
    mock_adapter.list_commits.side_effect = GitHubException("Not Found")
    with pytest.raises(BranchLabelerRequestError) as exc_info:
        await get_branch_commits(mock_adapter, "staging")
    assert exc_info.value.operation == "Branch commit"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_run_branch_labeler_workflow(adapter: AsyncMock) -> None:
    """Test that the workflow builds an adapter from the configuration and labels pull requests."""
    config = BranchLabelerConfig(
        debug=False,
        github_api_url="https://api.github.com",
        github_authentication_type=GitHubAuthenticationType.PAT,
        github_pat_token="token",
        github_app_id=None,
        github_app_private_key_path=None,
        github_app_installation_id=None,
        repo="owner/repo",
        target_branch="staging",
        label_name="in-staging",
    )

    with patch("github_ci_helpers.labels.branch_labeler.GitHubKitAdapter.create", new=AsyncMock(return_value=adapter)):
        result = await run_branch_labeler_workflow(config)

    assert result.pull_requests_with_action(LabelAction.ADD) == [1]
    adapter.list_commits.assert_awaited_once_with(sha="staging", max_commits=250)
