"""Contains reconciliation logic for the branch label on pull requests."""

import structlog
from githubkit.exception import RequestFailed

from github_ci_helpers.github.abc import GitHubClientBase
from github_ci_helpers.labels.models import LabelAction, PullRequestModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def has_label(pull_request: PullRequestModel, label_name: str) -> bool:
    """Return True if the pull request carries a label with the given name, ignoring case as GitHub does."""
    return any(label.name.casefold() == label_name.casefold() for label in pull_request.labels)


def decide_branch_label_action(show_branch_label: bool, label_present: bool) -> LabelAction:
    """Decide whether to add, remove, or leave the branch label on a pull request."""
    if show_branch_label:
        return LabelAction.NOOP if label_present else LabelAction.ADD
    if label_present:
        return LabelAction.REMOVE
    return LabelAction.NOOP


async def apply_branch_label_action(
    github_adapter: GitHubClientBase,
    pull_request_number: int,
    label_name: str,
    action: LabelAction,
) -> None:
    """Apply a label decision to a pull request."""
    if action == LabelAction.ADD:
        logger.info("Adding branch label", pull_request_number=pull_request_number, label_name=label_name)
        await github_adapter.add_labels_to_issue(pull_request_number, [label_name])
    elif action == LabelAction.REMOVE:
        logger.info("Removing branch label", pull_request_number=pull_request_number, label_name=label_name)
        try:
            await github_adapter.remove_label_from_issue(pull_request_number, label_name)
        except RequestFailed as exc:
            if exc.response.status_code != 404:
                raise
            logger.info("Branch label already removed", pull_request_number=pull_request_number, label_name=label_name)
    else:
        logger.debug("Branch label is up to date", pull_request_number=pull_request_number, label_name=label_name)


async def ensure_label_exists(
    github_adapter: GitHubClientBase,
    name: str,
    color: str,
    description: str | None = None,
) -> bool:
    """Create the label in the repository if it does not exist yet.

    Returns:
        True if the label was created, False if it already existed.
    """
    existing_labels = await github_adapter.list_labels()
    if any(label.name.casefold() == name.casefold() for label in existing_labels):
        logger.info("Label already exists", label_name=name)
        return False
    logger.info("Label not found in GitHub, creating it", label_name=name, color=color)
    await github_adapter.create_label(name=name, color=color, description=description)
    return True
