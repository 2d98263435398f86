"""Domain models for the self-healing orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

APPLY_TRACK_LABEL = "apply-track-label"
SET_MILESTONE = "set-milestone"


class HealingState(Enum):
    """Progress of one orchestration. FAILED is reachable from every step."""

    NOT_STARTED = "not-started"
    TRACK_REPAIR_ATTEMPTED = "track-repair-attempted"
    MILESTONE_LOOKUP = "milestone-lookup"
    MILESTONE_CREATE = "milestone-create"
    MILESTONE_ATTACH = "milestone-attach"
    DONE = "done"
    FAILED = "failed"


@dataclass
class HealingOutcome:
    """What the orchestrator did so far.

    ``actions`` is the classification's own action list, so entries recorded
    before a failure stay visible to telemetry.
    """

    actions: list[str] = field(default_factory=list)
    final_milestone_title: str | None = None
    state: HealingState = HealingState.NOT_STARTED
    failed_at: HealingState | None = None
    remote_calls: int = 0

    @property
    def succeeded(self) -> bool:
        return self.state is HealingState.DONE


def action_entry(kind: str, value: str) -> str:
    """``apply-track-label:track:bug`` style action record."""
    return f"{kind}:{value}"
