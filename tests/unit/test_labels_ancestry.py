"""Unit tests for the labels.ancestry module."""

from github_ci_helpers.labels.ancestry import commit_in_branch, should_show_branch_label
from github_ci_helpers.labels.models import CommitModel, CommitParentModel


def commit(sha: str, *parents: str) -> CommitModel:
    """Build a commit with the given parent shas."""
    return CommitModel(sha=sha, parents=[CommitParentModel(sha=parent) for parent in parents])


def test_commit_in_branch_direct_match() -> None:
    """Test that a commit on the branch is found by sha."""
    assert commit_in_branch(commit("a"), [commit("x", "w"), commit("a", "x")])


def test_commit_in_branch_as_merge_parent() -> None:
    """Test that a commit merged into the branch is found through the merge commit's parents."""
    branch_commits = [commit("m", "x", "b")]
    assert commit_in_branch(commit("b"), branch_commits)


def test_commit_in_branch_ignores_single_parent() -> None:
    """Test that the parent of a regular commit does not count as contained."""
    assert not commit_in_branch(commit("b"), [commit("c", "b")])


def test_should_show_branch_label() -> None:
    """Test that the label is shown only when every pull request commit is on the branch."""
    branch_commits = [commit("m", "x", "b"), commit("a", "x")]
    assert should_show_branch_label([commit("a"), commit("b")], branch_commits)
    assert not should_show_branch_label([commit("a"), commit("c")], branch_commits)


def test_should_show_branch_label_without_commits() -> None:
    """Test that a pull request without commits is trivially contained."""
    assert should_show_branch_label([], [])
