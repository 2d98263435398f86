"""Abstract contract of the remote issue/milestone store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MilestoneRef:
    """A remote milestone."""

    number: int
    title: str


class IIssueTracker(ABC):
    """Remote operations the self-healing orchestrator depends on.

    Every method may raise; callers wrap failures as ``api`` errors.
    """

    @abstractmethod
    async def list_open_milestones(self, owner: str, repo: str) -> list[MilestoneRef]:
        """All open milestones of the repository."""

    @abstractmethod
    async def create_milestone(self, owner: str, repo: str, title: str) -> MilestoneRef:
        """Create an open milestone and return it."""

    @abstractmethod
    async def update_issue_milestone(
        self, owner: str, repo: str, issue_number: int, milestone_number: int
    ) -> None:
        """Attach a milestone to an issue."""

    @abstractmethod
    async def add_labels(self, owner: str, repo: str, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue. Labels already present are left as they are."""
