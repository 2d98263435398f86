"""Telemetry: versioned audit payload of a run and its persistence."""

from task_assistant.telemetry.payload import TELEMETRY_VERSION, TelemetryPayload, build_payload
from task_assistant.telemetry.writer import TelemetryWriter, telemetry_filename

__all__ = [
    "TELEMETRY_VERSION",
    "TelemetryPayload",
    "TelemetryWriter",
    "build_payload",
    "telemetry_filename",
]
