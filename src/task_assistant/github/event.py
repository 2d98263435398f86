"""Loads the triggering issue event from the GitHub Actions event payload."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from task_assistant.issues.models import Issue, IssueEvent, RepoRef
from task_assistant.shared.domain.exceptions import fatal_error
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def parse_issue_event(payload: dict[str, Any], repository: str | None = None) -> IssueEvent | None:
    """
    Build an IssueEvent from a webhook payload.

    Args:
        payload: Decoded event payload
        repository: ``owner/repo`` fallback when the payload has no repository

    Returns:
        None when the payload carries no issue (not an issue event)

    Raises:
        EngineError: fatal, when the repository cannot be determined or the
            issue object is malformed
    """
    issue_data = payload.get("issue")
    if not isinstance(issue_data, dict):
        return None

    repo = _repo_from_payload(payload.get("repository"))
    if repo is None:
        if not repository:
            raise fatal_error("Cannot determine repository: payload has none and GITHUB_REPOSITORY is unset")
        try:
            repo = RepoRef.from_slug(repository)
        except ValueError as e:
            raise fatal_error(str(e), cause=e) from e

    try:
        issue = Issue.from_payload(issue_data)
    except (KeyError, TypeError, ValueError) as e:
        raise fatal_error("Malformed issue object in event payload", cause=e) from e

    return IssueEvent(repo=repo, issue=issue, action=payload.get("action"))


def load_issue_event(path: str | Path, repository: str | None = None) -> IssueEvent | None:
    """Read and parse the event payload file at ``path``."""
    event_path = Path(path)
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise fatal_error(f"Cannot read event payload at {event_path}", cause=e) from e

    if not isinstance(payload, dict):
        raise fatal_error(f"Event payload at {event_path} is not a JSON object")

    event = parse_issue_event(payload, repository)
    if event is not None:
        logger.debug("issue_event_loaded", repo=str(event.repo), issue=event.issue.number, action=event.action)
    return event


def _repo_from_payload(data: Any) -> RepoRef | None:
    if not isinstance(data, dict):
        return None
    owner = data.get("owner")
    owner_login = owner.get("login") if isinstance(owner, dict) else None
    name = data.get("name")
    if owner_login and name:
        return RepoRef(owner=str(owner_login), repo=str(name))
    full_name = data.get("full_name")
    if isinstance(full_name, str):
        try:
            return RepoRef.from_slug(full_name)
        except ValueError:
            return None
    return None
