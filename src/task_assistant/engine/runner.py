"""Engine runner - classification, self-healing and telemetry for one issue event."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import structlog

from task_assistant.classification.classifier import classify
from task_assistant.classification.models import STALE_ISSUE, Classification
from task_assistant.classification.stale import is_stale
from task_assistant.config.models import EngineConfig
from task_assistant.engine.models import EngineResult, RunOutcome
from task_assistant.github.base import IIssueTracker
from task_assistant.issues.models import IssueEvent
from task_assistant.self_healing.models import HealingState
from task_assistant.self_healing.orchestrator import SelfHealingOrchestrator
from task_assistant.shared.domain.exceptions import EngineError, as_engine_error, log_level_for
from task_assistant.shared.infrastructure.config import Settings
from task_assistant.shared.infrastructure.logging import get_logger
from task_assistant.telemetry.payload import build_payload
from task_assistant.telemetry.writer import TelemetryWriter

logger = get_logger(__name__)


class TaskAssistantEngine:
    """Runs the decision pipeline for exactly one issue event.

    Flow:
    1. Classify the issue's track from its labels
    2. Flag stale issues (when enabled)
    3. Self-healing: repair track label and milestone
    4. Telemetry: always assembled, even when step 3 failed partway
    5. Return the result and, for a failed run, the error
    """

    def __init__(
        self,
        settings: Settings,
        tracker: IIssueTracker,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._tracker = tracker
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def run(self, event: IssueEvent, config: EngineConfig) -> RunOutcome:
        issue = event.issue
        structlog.contextvars.bind_contextvars(repository=str(event.repo), issue_number=issue.number)
        try:
            logger.info("issue_processing", title=issue.title, labels=list(issue.labels))

            classification = classify(config, issue.labels)
            logger.info("track_classified", track=classification.track or "none")

            if config.stale.enabled and is_stale(issue, config.stale.days, now=self._clock()):
                classification.add_violation(STALE_ISSUE)

            if classification.violations:
                logger.warning("classification_violations", violations=list(classification.violations))

            orchestrator = SelfHealingOrchestrator(self._tracker, event.repo)
            error: EngineError | None = None
            try:
                await orchestrator.orchestrate(config, issue, classification)
            except EngineError as e:
                error = e
            except Exception as e:
                error = as_engine_error(e)

            outcome = orchestrator.outcome
            final_milestone = (
                issue.milestone_title
                if outcome.state is HealingState.NOT_STARTED
                else outcome.final_milestone_title
            )

            telemetry_file = self._write_telemetry(event, config, classification, final_milestone)

            result = EngineResult(
                track=classification.track,
                actions=tuple(classification.actions),
                milestone=final_milestone,
                telemetry_file=telemetry_file,
            )

            if error is not None:
                getattr(logger, log_level_for(error.severity))(
                    "run_failed",
                    severity=error.severity.value,
                    error=error.message,
                )
            else:
                logger.info("run_completed", track=result.track, actions=list(result.actions))

            return RunOutcome(result=result, classification=classification, error=error)
        finally:
            structlog.contextvars.unbind_contextvars("repository", "issue_number")

    def telemetry_root(self, config: EngineConfig) -> Path:
        return Path(self._settings.telemetry_root or config.telemetry.path)

    def _write_telemetry(
        self,
        event: IssueEvent,
        config: EngineConfig,
        classification: Classification,
        final_milestone: str | None,
    ) -> str | None:
        if not (config.telemetry.enabled and self._settings.telemetry_enabled):
            logger.info("telemetry_disabled")
            return None

        payload = build_payload(
            event.repo,
            event.issue,
            classification,
            final_milestone,
            generated_at=self._clock(),
        )
        written = TelemetryWriter(self.telemetry_root(config)).write(event.issue.number, payload)
        if written is None:
            logger.warning("telemetry_not_written")
            return None

        logger.info("telemetry_written", path=str(written))
        return str(written)
