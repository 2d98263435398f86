"""Self-healing orchestrator - repairs the track label and milestone of an issue."""

from __future__ import annotations

from task_assistant.classification.models import Classification
from task_assistant.config.models import EngineConfig
from task_assistant.github.base import IIssueTracker
from task_assistant.issues.labels import add_issue_labels
from task_assistant.issues.models import Issue, RepoRef
from task_assistant.milestones.manager import attach_milestone_to_issue, ensure_milestone
from task_assistant.milestones.rules import resolve_milestone
from task_assistant.self_healing.models import (
    APPLY_TRACK_LABEL,
    SET_MILESTONE,
    HealingOutcome,
    HealingState,
    action_entry,
)
from task_assistant.shared.domain.exceptions import EngineError
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SelfHealingOrchestrator:
    """Decides and performs corrective actions for one issue.

    The only component allowed to call the remote tracker. Steps run strictly
    in sequence, each remote call awaited before the next:

    1. Self-healing disabled -> nothing to do
    2. Track-label repair (``fix_missing_track``)
    3. Milestone repair (``fix_missing_milestone``): lookup, optional create,
       attach
    4. Any remote failure aborts the remaining steps; actions recorded so far
       stay recorded. No retry, no rollback.

    One instance serves one run. ``outcome`` stays readable after a failure.
    """

    def __init__(self, tracker: IIssueTracker, repo: RepoRef) -> None:
        self._tracker = tracker
        self._repo = repo
        self._outcome = HealingOutcome()

    @property
    def outcome(self) -> HealingOutcome:
        return self._outcome

    async def orchestrate(
        self,
        config: EngineConfig,
        issue: Issue,
        classification: Classification,
    ) -> HealingOutcome:
        """Run the corrective steps and return what was done.

        Raises:
            EngineError: api severity, when a remote call fails
        """
        if self._outcome.state is not HealingState.NOT_STARTED:
            raise RuntimeError("SelfHealingOrchestrator instances are single-use")

        self._outcome.actions = classification.actions
        self._outcome.final_milestone_title = issue.milestone_title

        healing = config.self_healing
        if not healing.enabled:
            logger.info("self_healing_disabled", issue=issue.number)
            self._enter(HealingState.DONE)
            return self._outcome

        try:
            if healing.fix_missing_track and classification.track_label_to_apply:
                await self._repair_track_label(issue, classification)
            self._enter(HealingState.TRACK_REPAIR_ATTEMPTED)

            if healing.fix_missing_milestone:
                await self._repair_milestone(config, issue, classification)
        except EngineError as e:
            self._outcome.failed_at = self._outcome.state
            self._enter(HealingState.FAILED)
            logger.error(
                "self_healing_aborted",
                issue=issue.number,
                failed_at=self._outcome.failed_at.value,
                severity=e.severity.value,
                error=e.message,
                actions=list(self._outcome.actions),
                remote_calls=self._outcome.remote_calls,
            )
            raise

        self._enter(HealingState.DONE)
        logger.info(
            "self_healing_completed",
            issue=issue.number,
            actions=list(self._outcome.actions),
            remote_calls=self._outcome.remote_calls,
        )
        return self._outcome

    async def _repair_track_label(self, issue: Issue, classification: Classification) -> None:
        label = classification.track_label_to_apply
        logger.info("track_label_applying", issue=issue.number, label=label)

        self._outcome.remote_calls += 1
        await add_issue_labels(self._tracker, repo=self._repo, issue_number=issue.number, labels=[label])
        classification.add_action(action_entry(APPLY_TRACK_LABEL, label))

    async def _repair_milestone(self, config: EngineConfig, issue: Issue, classification: Classification) -> None:
        desired = resolve_milestone(config, classification.track)
        current = self._outcome.final_milestone_title

        if desired is None or desired == current:
            logger.debug("milestone_unchanged", issue=issue.number, desired=desired, current=current)
            return

        logger.info("milestone_enforcing", issue=issue.number, title=desired, previous=current)

        self._enter(HealingState.MILESTONE_LOOKUP)
        self._outcome.remote_calls += 1
        number = await ensure_milestone(
            self._tracker,
            repo=self._repo,
            title=desired,
            on_create=self._on_create,
        )

        self._enter(HealingState.MILESTONE_ATTACH)
        self._outcome.remote_calls += 1
        await attach_milestone_to_issue(
            self._tracker,
            repo=self._repo,
            issue_number=issue.number,
            milestone_number=number,
        )

        self._outcome.final_milestone_title = desired
        classification.add_action(action_entry(SET_MILESTONE, desired))

    def _on_create(self) -> None:
        self._enter(HealingState.MILESTONE_CREATE)
        self._outcome.remote_calls += 1

    def _enter(self, state: HealingState) -> None:
        logger.debug("self_healing_state", previous=self._outcome.state.value, state=state.value)
        self._outcome.state = state
