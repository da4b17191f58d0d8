"""Pydantic models for pull requests, commits and labels used by the branch labeler."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class LabelAction(str, Enum):
    """What to do with the branch label on a pull request."""

    ADD = "add"
    REMOVE = "remove"
    NOOP = "noop"


class LabelModel(BaseModel):
    """Pydantic model for a GitHub label attached to a pull request."""

    name: str


class CommitParentModel(BaseModel):
    """Pydantic model for the parent reference of a commit."""

    sha: str


class CommitModel(BaseModel):
    """Pydantic model for a commit as needed for ancestry checks."""

    sha: str
    author: str | None = None
    parents: list[CommitParentModel] = Field(default_factory=list)

    @property
    def is_merge_commit(self) -> bool:
        """True when the commit has more than one parent."""
        return len(self.parents) > 1

    @classmethod
    def from_github(cls, data: dict[str, Any]) -> "CommitModel":
        """Build a commit from the raw JSON returned by the GitHub commits endpoints."""
        author = ((data.get("commit") or {}).get("author") or {}).get("name")
        return cls(
            sha=data["sha"],
            author=author,
            parents=[CommitParentModel(sha=parent["sha"]) for parent in data.get("parents") or []],
        )


class PullRequestModel(BaseModel):
    """Pydantic model for an open pull request."""

    number: int
    title: str
    labels: list[LabelModel] = Field(default_factory=list)
    commits_url: str | None = None

    @classmethod
    def from_github(cls, pull_request: Any) -> "PullRequestModel":
        """Build a pull request from a githubkit pull request object."""
        return cls(
            number=pull_request.number,
            title=pull_request.title,
            labels=[LabelModel(name=label.name) for label in pull_request.labels or []],
            commits_url=pull_request.commits_url,
        )


class BranchLabelResult(BaseModel):
    """Outcome of reconciling the branch label on one pull request."""

    pull_request_number: int
    show_branch_label: bool
    action: LabelAction


class BranchLabelerResult:
    """Contains results of the branch labeler workflow."""

    def __init__(self, results: list[BranchLabelResult]) -> None:
        """Initialize the result with per pull request outcomes."""
        self.results = results

    def pull_requests_with_action(self, action: LabelAction) -> list[int]:
        """Return the numbers of the pull requests the given action was applied to."""
        return [result.pull_request_number for result in self.results if result.action == action]
