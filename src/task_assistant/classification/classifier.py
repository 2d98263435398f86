"""Track classification using case-insensitive substring matching on labels."""

from __future__ import annotations

from collections.abc import Iterable

from task_assistant.classification.models import NO_TRACK_MATCHED, TRACK_LABEL_PREFIX, Classification
from task_assistant.config.models import EngineConfig
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def track_label(track: str) -> str:
    """Label marking an issue as belonging to ``track``."""
    return f"{TRACK_LABEL_PREFIX}{track}"


def match_track(config: EngineConfig, labels: Iterable[str]) -> str | None:
    """Return the first declared track with a pattern contained in any label.

    First match, not best match: later tracks are never considered once one
    matched. Patterns are plain substrings, not regular expressions.
    """
    normalized = [label.lower() for label in labels]

    for name, patterns in config.tracks.items():
        for pattern in patterns:
            needle = pattern.lower()
            if any(needle in label for label in normalized):
                logger.debug("track_pattern_matched", track=name, pattern=pattern)
                return name
    return None


def classify(config: EngineConfig, labels: Iterable[str]) -> Classification:
    """Classify an issue's track from its labels. Pure and deterministic."""
    classification = Classification()

    track = match_track(config, labels)
    if track is None:
        classification.add_violation(NO_TRACK_MATCHED)
        return classification

    classification.track = track
    classification.track_label_to_apply = track_label(track)
    return classification
