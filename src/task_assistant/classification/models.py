"""Classification record produced once per run."""

from __future__ import annotations

from dataclasses import dataclass, field

NO_TRACK_MATCHED = "no-track-matched"
STALE_ISSUE = "stale-issue"
TRACK_LABEL_PREFIX = "track:"


@dataclass
class Classification:
    """Track decision plus the append-only violation and action logs.

    Created by the classifier; afterwards only the self-healing orchestrator
    appends to ``actions`` (and the engine to ``violations``).
    """

    track: str | None = None
    track_label_to_apply: str | None = None
    violations: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def add_violation(self, violation: str) -> None:
        self.violations.append(violation)

    def add_action(self, action: str) -> None:
        self.actions.append(action)

    def to_dict(self) -> dict:
        return {
            "track": self.track,
            "trackLabelToApply": self.track_label_to_apply,
            "violations": list(self.violations),
            "actions": list(self.actions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Classification:
        return cls(
            track=data.get("track"),
            track_label_to_apply=data.get("trackLabelToApply"),
            violations=list(data.get("violations") or []),
            actions=list(data.get("actions") or []),
        )
