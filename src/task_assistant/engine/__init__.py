"""Engine: wires classification, self-healing and telemetry for one run."""

from task_assistant.engine.models import EngineResult, RunOutcome
from task_assistant.engine.runner import TaskAssistantEngine

__all__ = [
    "EngineResult",
    "RunOutcome",
    "TaskAssistantEngine",
]
