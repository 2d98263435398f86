"""Process-level entry: one engine run driven by a GitHub Actions event."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from task_assistant.config.loader import DEFAULT_CONFIG_PATH, load_config
from task_assistant.engine.models import RunOutcome
from task_assistant.engine.runner import TaskAssistantEngine
from task_assistant.github.actions import notice, set_failed, set_output
from task_assistant.github.base import IIssueTracker
from task_assistant.github.client import GitHubClient
from task_assistant.github.event import load_issue_event
from task_assistant.shared.domain.exceptions import fatal_error
from task_assistant.shared.infrastructure.config import Settings
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def run_action(
    settings: Settings,
    config_path: str | Path = DEFAULT_CONFIG_PATH,
    event_path: str | Path | None = None,
    tracker: IIssueTracker | None = None,
    stream: TextIO | None = None,
) -> RunOutcome | None:
    """
    Execute one run and publish its result.

    Returns:
        The run outcome, or None when the event carries no issue

    Raises:
        EngineError: fatal, when the event payload cannot be loaded
    """
    logger.info("task_assistant_starting", run_mode=settings.run_mode)

    event_file = event_path or settings.event_path
    if not event_file:
        raise fatal_error("No event payload: set GITHUB_EVENT_PATH or pass --event")

    event = load_issue_event(event_file, settings.repository)
    if event is None:
        notice("No issue in event payload. This action should be triggered by an issue event.", stream=stream)
        return None

    config = load_config(config_path, overrides=settings.config_overrides())
    tracker = tracker or GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.http_timeout,
    )

    outcome = await TaskAssistantEngine(settings, tracker).run(event, config)

    set_output("result", outcome.result.to_json(), stream=stream)
    if outcome.error is not None:
        set_failed(outcome.error.to_display(debug=settings.debug), stream=stream)

    return outcome
