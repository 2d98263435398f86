"""Self-healing module - repairs missing track labels and milestones.

Public API:
    SelfHealingOrchestrator  - performs the corrective steps for one issue
    HealingOutcome           - actions and final milestone of a run
    HealingState             - orchestration progress
"""

from task_assistant.self_healing.models import HealingOutcome, HealingState
from task_assistant.self_healing.orchestrator import SelfHealingOrchestrator

__all__ = [
    "HealingOutcome",
    "HealingState",
    "SelfHealingOrchestrator",
]
