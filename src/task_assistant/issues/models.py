"""Read-only models of the triggering repository and issue."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RepoRef:
    """Repository identity."""

    owner: str
    repo: str

    @classmethod
    def from_slug(cls, slug: str) -> RepoRef:
        """Parse ``owner/repo``."""
        owner, sep, repo = slug.strip().partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Invalid repository slug '{slug}', expected 'owner/repo'")
        return cls(owner=owner, repo=repo)

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class Issue:
    """Issue state as delivered by the event payload."""

    id: int
    number: int
    title: str = ""
    state: str = "open"
    labels: tuple[str, ...] = field(default_factory=tuple)
    milestone_title: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Issue:
        """
        Build an Issue from a GitHub issue object.

        Labels may be plain strings or ``{"name": ...}`` objects; duplicates
        are dropped while keeping the first occurrence order.
        """
        labels: list[str] = []
        for label in data.get("labels") or []:
            name = label if isinstance(label, str) else (label or {}).get("name")
            if isinstance(name, str) and name not in labels:
                labels.append(name)

        milestone = data.get("milestone")
        milestone_title = milestone.get("title") if isinstance(milestone, dict) else None

        return cls(
            id=int(data.get("id") or 0),
            number=int(data["number"]),
            title=str(data.get("title") or ""),
            state=str(data.get("state") or "open"),
            labels=tuple(labels),
            milestone_title=milestone_title,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass(frozen=True)
class IssueEvent:
    """One issue event: the unit of work of a run."""

    repo: RepoRef
    issue: Issue
    action: str | None = None
