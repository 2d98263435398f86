"""Run results returned to the invoking harness."""

from __future__ import annotations

import json
from dataclasses import dataclass

from task_assistant.classification.models import Classification
from task_assistant.shared.domain.exceptions import EngineError


@dataclass(frozen=True)
class EngineResult:
    """Terminal summary of one run. Immutable once emitted."""

    track: str | None
    actions: tuple[str, ...]
    milestone: str | None
    telemetry_file: str | None

    def to_dict(self) -> dict:
        return {
            "track": self.track,
            "actions": list(self.actions),
            "milestone": self.milestone,
            "telemetryFile": self.telemetry_file,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class RunOutcome:
    """Result plus the error that failed the run, if any."""

    result: EngineResult
    classification: Classification
    error: EngineError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
