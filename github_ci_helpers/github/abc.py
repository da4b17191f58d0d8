"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # Label CRUD
    @abstractmethod
    async def create_label(self, name: str, color: str, description: str | None = None, **kwargs: Any) -> Any:
        """Create a label for a repository."""
        pass

    @abstractmethod
    async def list_labels(self, **kwargs: Any) -> list[Any]:
        """List labels for a repository."""
        pass

    @abstractmethod
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> Any:
        """Add labels to an issue (or pull request) without touching its other labels."""
        pass

    @abstractmethod
    async def remove_label_from_issue(self, issue_number: int, name: str) -> None:
        """Remove a single label from an issue (or pull request)."""
        pass

    # Pull Request operations
    @abstractmethod
    async def list_pull_requests(self, state: Literal["open", "closed", "all"] = "open", **kwargs: Any) -> list[Any]:
        """List pull requests for a repository."""
        pass

    @abstractmethod
    async def list_files_in_pull_request(self, pull_number: int) -> list[Any]:
        """List files changed in a pull request."""
        pass

    @abstractmethod
    async def list_pull_request_commits(self, pull_number: int) -> list[dict[str, Any]]:
        """List the commits of a pull request."""
        pass

    # Content and commit operations
    @abstractmethod
    async def get_file_content(self, file_path: str, ref: str) -> str:
        """Get the decoded content of a file at a branch, tag or commit."""
        pass

    @abstractmethod
    async def list_commits(self, sha: str | None = None, **kwargs: Any) -> list[dict[str, Any]]:
        """List commits reachable from a branch or SHA."""
        pass
