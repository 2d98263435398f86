"""
Track -> milestone title resolution.

Given a track name from the classifier, determines which milestone title the
issue should carry. Does not check that the milestone exists remotely.
"""

from __future__ import annotations

from task_assistant.config.models import EngineConfig
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def resolve_milestone(config: EngineConfig, track: str | None) -> str | None:
    if track is None:
        logger.debug("milestone_unresolved", reason="no_track")
        return None

    title = config.milestone_rules.get(track)
    if title is None:
        logger.debug("milestone_unresolved", reason="no_rule", track=track)
        return None

    logger.debug("milestone_resolved", track=track, title=title)
    return title
