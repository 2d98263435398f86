"""GitHub integration: REST client, event payload loading and Actions outputs."""

from task_assistant.github.base import IIssueTracker, MilestoneRef
from task_assistant.github.client import GitHubClient
from task_assistant.github.event import load_issue_event, parse_issue_event

__all__ = [
    "GitHubClient",
    "IIssueTracker",
    "MilestoneRef",
    "load_issue_event",
    "parse_issue_event",
]
