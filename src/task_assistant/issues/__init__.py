"""
Issues module - repository and issue models consumed by the engine.
"""

from task_assistant.issues.models import Issue, IssueEvent, RepoRef

__all__ = [
    "Issue",
    "IssueEvent",
    "RepoRef",
]
