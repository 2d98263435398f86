"""Versioned telemetry payload: the audit record of one run."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from task_assistant.classification.models import Classification
from task_assistant.issues.models import Issue, RepoRef

TELEMETRY_VERSION = 1
ISSUE_EVENT = "issue_event"


@dataclass(frozen=True)
class TelemetryPayload:
    """Immutable snapshot taken at the end of a run.

    Mappings and lists are copied at construction and exposed read-only, so
    later mutation of the run's classification cannot change an assembled
    payload.
    """

    repository: RepoRef
    issue: Mapping[str, Any]
    classification: Mapping[str, Any]
    actions: tuple[str, ...]
    generated_at: str
    version: int = TELEMETRY_VERSION
    event: str = ISSUE_EVENT

    def __post_init__(self) -> None:
        classification = dict(self.classification)
        classification["violations"] = tuple(classification.get("violations") or ())
        classification["actions"] = tuple(classification.get("actions") or ())
        issue = dict(self.issue)
        issue["labels"] = tuple(issue.get("labels") or ())
        object.__setattr__(self, "issue", MappingProxyType(issue))
        object.__setattr__(self, "classification", MappingProxyType(classification))
        object.__setattr__(self, "actions", tuple(self.actions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "event": self.event,
            "generated_at": self.generated_at,
            "repository": {"owner": self.repository.owner, "repo": self.repository.repo},
            "issue": {**self.issue, "labels": list(self.issue["labels"])},
            "classification": {
                **self.classification,
                "violations": list(self.classification.get("violations", [])),
                "actions": list(self.classification.get("actions", [])),
            },
            "actions": list(self.actions),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TelemetryPayload:
        """Rebuild a payload read back from disk.

        Raises ``ValueError`` on a missing key or an unsupported version.
        """
        required = ("version", "event", "generated_at", "repository", "issue", "classification", "actions")
        for key in required:
            if key not in data:
                raise ValueError(f"Telemetry payload missing required key: {key}")
        if data["version"] != TELEMETRY_VERSION:
            raise ValueError(f"Unsupported telemetry version: {data['version']}")

        classification = Classification.from_dict(data["classification"]).to_dict()
        return cls(
            repository=RepoRef(owner=str(data["repository"]["owner"]), repo=str(data["repository"]["repo"])),
            issue=dict(data["issue"]),
            classification=classification,
            actions=tuple(data["actions"]),
            generated_at=str(data["generated_at"]),
            version=int(data["version"]),
            event=str(data["event"]),
        )

    @classmethod
    def from_json(cls, text: str) -> TelemetryPayload:
        return cls.from_dict(json.loads(text))


def build_payload(
    repo: RepoRef,
    issue: Issue,
    classification: Classification,
    final_milestone_title: str | None,
    actions: list[str] | None = None,
    generated_at: datetime | None = None,
) -> TelemetryPayload:
    """
    Assemble the payload from whatever the run accumulated.

    Works after a failed orchestration as well: ``final_milestone_title`` and
    ``actions`` are taken as they were at the failure point.
    """
    timestamp = (generated_at or datetime.now(timezone.utc)).isoformat().replace("+00:00", "Z")
    recorded = list(classification.actions if actions is None else actions)

    return TelemetryPayload(
        repository=repo,
        issue={
            "id": issue.id,
            "number": issue.number,
            "title": issue.title,
            "state": issue.state,
            "labels": list(issue.labels),
            "milestone": final_milestone_title,
            "created_at": issue.created_at,
            "updated_at": issue.updated_at,
        },
        classification=classification.to_dict(),
        actions=tuple(recorded),
        generated_at=timestamp,
    )
