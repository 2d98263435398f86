"""Track classification of issues."""

from task_assistant.classification.classifier import classify, match_track, track_label
from task_assistant.classification.models import NO_TRACK_MATCHED, STALE_ISSUE, Classification
from task_assistant.classification.stale import is_stale

__all__ = [
    "NO_TRACK_MATCHED",
    "STALE_ISSUE",
    "Classification",
    "classify",
    "is_stale",
    "match_track",
    "track_label",
]
