"""GitHub client adapter for the githubkit library."""

import base64
from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import DiffEntry, Label, PullRequestSimple

from github_ci_helpers.configuration.models import GitHubAuthenticationType
from github_ci_helpers.utils.constants import DEFAULT_GITHUB_API_URL
from github_ci_helpers.utils.github import split_repository_in_configuration
from github_ci_helpers.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
T = TypeVar("T")


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except ValueError:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
                raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc
            raise

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    async def _paginate(self, fetch_page: Callable[[int], Awaitable[list[T]]], per_page: int, max_items: int | None = None) -> list[T]:
        """Collect pages returned by `fetch_page` until a short or empty page is seen or `max_items` is reached."""
        items: list[T] = []
        page: int = 1
        while True:
            page_items = await fetch_page(page)
            if not page_items:
                break
            items.extend(page_items)
            if max_items is not None and len(items) >= max_items:
                return items[:max_items]
            if len(page_items) < per_page:
                break
            page += 1
        return items

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | str | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | str | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(
            repo=repo,
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # Label CRUD
    @handle_github_422
    @retry_on_rate_limit()
    async def create_label(self, name: str, color: str, description: str | None = None, **kwargs: Any) -> Label:
        """Create a label for a repository."""
        params = self._omit_null_parameters(
            name=name,
            color=color,
            description=description,
            **kwargs,
        )
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return response.parsed_data

    @retry_on_rate_limit()
    async def list_labels(self, per_page: int = 100, **kwargs: Any) -> list[Label]:
        """List all labels for a repository, handling pagination."""

        async def _fetch_page(page: int) -> list[Label]:
            response: Response[list[Label]] = await self.client.rest.issues.async_list_labels_for_repo(
                owner=self.owner,
                repo=self.repo_name,
                per_page=per_page,
                page=page,
                **kwargs,
            )
            return response.parsed_data

        return await self._paginate(_fetch_page, per_page)

    @handle_github_422
    @retry_on_rate_limit()
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> list[Label]:
        """Add labels to an issue or pull request. Labels already present are left as they are."""
        response: Response[list[Label]] = await self.client.rest.issues.async_add_labels(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            labels=labels,
        )
        return response.parsed_data

    @retry_on_rate_limit()
    async def remove_label_from_issue(self, issue_number: int, name: str) -> None:
        """Remove a single label from an issue or pull request."""
        await self.client.rest.issues.async_remove_label(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            name=name,
        )

    # Pull Request operations
    @retry_on_rate_limit()
    async def list_pull_requests(
        self, state: Literal["open", "closed", "all"] = "open", per_page: int = 100, **kwargs: Any
    ) -> list[PullRequestSimple]:
        """List all pull requests for a repository, handling pagination."""

        async def _fetch_page(page: int) -> list[PullRequestSimple]:
            response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
                owner=self.owner,
                repo=self.repo_name,
                state=state,
                per_page=per_page,
                page=page,
                **kwargs,
            )
            return response.parsed_data

        return await self._paginate(_fetch_page, per_page)

    @retry_on_rate_limit()
    async def list_files_in_pull_request(self, pull_number: int, per_page: int = 100) -> list[DiffEntry]:
        """List all files changed in a pull request, handling pagination."""

        async def _fetch_page(page: int) -> list[DiffEntry]:
            response: Response[list[DiffEntry]] = await self.client.rest.pulls.async_list_files(
                owner=self.owner,
                repo=self.repo_name,
                pull_number=pull_number,
                per_page=per_page,
                page=page,
            )
            return response.parsed_data

        files = await self._paginate(_fetch_page, per_page)
        logger.info("Fetched files changed in pull request", pull_number=pull_number, file_count=len(files))
        return files

    @retry_on_rate_limit()
    async def list_pull_request_commits(self, pull_number: int, per_page: int = 100) -> list[dict[str, Any]]:
        """List all commits of a pull request as raw dictionaries, handling pagination."""

        async def _fetch_page(page: int) -> list[dict[str, Any]]:
            response = await self.client.rest.pulls.async_list_commits(
                owner=self.owner,
                repo=self.repo_name,
                pull_number=pull_number,
                per_page=per_page,
                page=page,
            )
            # Raw JSON sidesteps model validation of the commit verification field
            return response.json()

        return await self._paginate(_fetch_page, per_page)

    # Content and commit operations
    @retry_on_rate_limit()
    async def get_file_content(self, file_path: str, ref: str) -> str:
        """Get the decoded content of a file at a branch, tag or commit."""
        response = await self.client.rest.repos.async_get_content(
            owner=self.owner,
            repo=self.repo_name,
            path=file_path,
            ref=ref,
        )
        content = getattr(response.parsed_data, "content", None)
        if content is None:
            raise ValueError(f"Path '{file_path}' at ref '{ref}' is not a file")
        return base64.b64decode(content).decode("utf-8")

    @retry_on_rate_limit()
    async def list_commits(
        self, sha: str | None = None, per_page: int = 100, max_commits: int | None = None, **kwargs: Any
    ) -> list[dict[str, Any]]:
        """List commits reachable from a branch or SHA as raw dictionaries, handling pagination.

        Args:
            sha: SHA or branch to start listing commits from (default: default branch)
            per_page: Number of commits per page (default: 100, max: 100)
            max_commits: Stop after this many commits (newest first); None fetches the whole history
            **kwargs: Additional parameters to pass to the API (path, author, since, until...)

        Returns:
            List of commit dictionaries as returned by the GitHub API
        """

        async def _fetch_page(page: int) -> list[dict[str, Any]]:
            params = self._omit_null_parameters(sha=sha, per_page=per_page, page=page, **kwargs)
            response = await self.client.rest.repos.async_list_commits(owner=self.owner, repo=self.repo_name, **params)
            return response.json()

        logger.info("Fetching commits for repository", owner=self.owner, repo=self.repo_name, sha=sha, max_commits=max_commits)
        commits = await self._paginate(_fetch_page, per_page, max_items=max_commits)
        logger.info("Fetched all commits", owner=self.owner, repo=self.repo_name, sha=sha, total_commits=len(commits))
        return commits
