"""Label operations on the triggering issue."""

from __future__ import annotations

from task_assistant.github.base import IIssueTracker
from task_assistant.issues.models import RepoRef
from task_assistant.shared.infrastructure.error_handler import wrap_api_errors
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@wrap_api_errors(
    "Failed to apply labels {labels} to issue #{issue_number}",
    context_keys=["repo", "issue_number", "labels"],
)
async def add_issue_labels(
    tracker: IIssueTracker,
    *,
    repo: RepoRef,
    issue_number: int,
    labels: list[str],
) -> None:
    """Add ``labels`` to the issue. Presence is not checked: adding is idempotent upstream."""
    logger.info("labels_applying", issue=issue_number, labels=labels)
    await tracker.add_labels(repo.owner, repo.repo, issue_number, labels)
