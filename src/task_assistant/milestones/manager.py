"""
Milestone lookup, creation and attachment.

Structured wrappers around the remote milestone operations: every failure
surfaces as an ``api``-severity EngineError carrying the original cause.

Lookup-then-create is not atomic: two concurrent runs that both miss the
milestone may both try to create it. The GitHub client absorbs the
resulting duplicate conflict; other trackers must handle it themselves.
"""

from __future__ import annotations

from collections.abc import Callable

from task_assistant.github.base import IIssueTracker, MilestoneRef
from task_assistant.issues.models import RepoRef
from task_assistant.shared.infrastructure.error_handler import wrap_api_errors
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@wrap_api_errors("Failed to list milestones for {repo}", context_keys=["repo"])
async def list_open_milestones(tracker: IIssueTracker, *, repo: RepoRef) -> list[MilestoneRef]:
    logger.debug("milestones_listing", repo=str(repo))
    return await tracker.list_open_milestones(repo.owner, repo.repo)


async def find_milestone_by_title(tracker: IIssueTracker, *, repo: RepoRef, title: str) -> int | None:
    """Number of the open milestone titled exactly ``title``, if any."""
    for milestone in await list_open_milestones(tracker, repo=repo):
        if milestone.title == title:
            return milestone.number
    return None


@wrap_api_errors("Failed to create milestone '{title}'", context_keys=["repo", "title"])
async def create_milestone(tracker: IIssueTracker, *, repo: RepoRef, title: str) -> int:
    logger.info("milestone_creating", repo=str(repo), title=title)
    milestone = await tracker.create_milestone(repo.owner, repo.repo, title)
    return milestone.number


async def ensure_milestone(
    tracker: IIssueTracker,
    *,
    repo: RepoRef,
    title: str,
    on_create: Callable[[], None] | None = None,
) -> int:
    """Return the number of the open milestone ``title``, creating it if absent.

    ``on_create`` is invoked right before the create call.
    """
    logger.info("milestone_ensuring", repo=str(repo), title=title)

    existing = await find_milestone_by_title(tracker, repo=repo, title=title)
    if existing is not None:
        logger.debug("milestone_exists", title=title, number=existing)
        return existing

    if on_create is not None:
        on_create()
    return await create_milestone(tracker, repo=repo, title=title)


@wrap_api_errors(
    "Failed to attach milestone #{milestone_number} to issue #{issue_number}",
    context_keys=["repo", "issue_number", "milestone_number"],
)
async def attach_milestone_to_issue(
    tracker: IIssueTracker,
    *,
    repo: RepoRef,
    issue_number: int,
    milestone_number: int,
) -> None:
    logger.info("milestone_attaching", issue=issue_number, milestone=milestone_number)
    await tracker.update_issue_milestone(repo.owner, repo.repo, issue_number, milestone_number)
