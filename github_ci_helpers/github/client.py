"""Sets up the authenticated githubkit client."""

from pathlib import Path
from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import AppAuthStrategy, AppInstallationAuthStrategy, TokenAuthStrategy

from github_ci_helpers.configuration.models import GitHubAuthenticationType
from github_ci_helpers.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy]


async def get_github_app_client(
    repo: str,
    github_app_id: int | str,
    github_app_private_key_path: Path,
    github_app_installation_id: int | str,
    github_api_url: str,
) -> GitHub[AppInstallationAuthStrategy]:
    """Returns a client authenticated as the GitHub App installation for the repository."""
    private_key = Path(github_app_private_key_path).read_text()
    app_client = GitHub(
        auth=AppAuthStrategy(app_id=github_app_id, private_key=private_key),
        base_url=github_api_url,
        http_cache=False,
    )
    owner, repository = await split_repository_in_configuration(repo=repo)
    try:
        response = await app_client.rest.apps.async_get_repo_installation(owner=owner, repo=repository)
    except Exception as e:
        raise ValueError(f"Failed to get GitHub App installation for {repo}: {e}") from e
    installation_id = response.parsed_data.id
    if str(installation_id) != str(github_app_installation_id):
        logger.warning(
            "Configured installation ID differs from the repository installation, using the repository installation",
            configured_installation_id=github_app_installation_id,
            repository_installation_id=installation_id,
        )
    return app_client.with_auth(app_client.auth.as_installation(installation_id))


async def get_github_client(
    repo: str,
    github_auth_type: GitHubAuthenticationType,
    github_pat_token: str | None,
    github_app_id: int | str | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | str | None,
    github_api_url: str,
) -> GitHubClient:
    """Returns an authenticated GitHub client using either GitHub App or PAT credentials.

    HTTP caching is disabled so every CI run sees fresh data.
    """
    if github_auth_type == GitHubAuthenticationType.APP:
        if not (github_app_id and github_app_private_key_path and github_app_installation_id):
            raise RuntimeError("GitHub App authentication requires app_id, private_key_path, and installation_id in config.")
        return await get_github_app_client(repo, github_app_id, github_app_private_key_path, github_app_installation_id, github_api_url)
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)
