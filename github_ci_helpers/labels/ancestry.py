"""Decides whether a pull request's commits are already contained in a branch."""

from github_ci_helpers.labels.models import CommitModel


def commit_in_branch(commit: CommitModel, branch_commits: list[CommitModel]) -> bool:
    """Return True if the commit is on the branch directly or as a parent of a merge commit."""
    for branch_commit in branch_commits:
        if branch_commit.sha == commit.sha:
            return True
        if branch_commit.is_merge_commit and any(parent.sha == commit.sha for parent in branch_commit.parents):
            return True
    return False


def should_show_branch_label(pr_commits: list[CommitModel], branch_commits: list[CommitModel]) -> bool:
    """Return True if every pull request commit is contained in the branch.

    A pull request without commits is trivially contained.
    """
    return all(commit_in_branch(commit, branch_commits) for commit in pr_commits)
