"""Milestone rules and remote milestone management."""

from task_assistant.milestones.manager import (
    attach_milestone_to_issue,
    create_milestone,
    ensure_milestone,
    find_milestone_by_title,
    list_open_milestones,
)
from task_assistant.milestones.rules import resolve_milestone

__all__ = [
    "attach_milestone_to_issue",
    "create_milestone",
    "ensure_milestone",
    "find_milestone_by_title",
    "list_open_milestones",
    "resolve_milestone",
]
