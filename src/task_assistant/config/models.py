"""Typed, fully defaulted engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_TELEMETRY_PATH = "telemetry"
DEFAULT_STALE_DAYS = 30


def _frozen_mapping(data: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class SelfHealingConfig:
    """Which corrective actions the engine may take."""

    enabled: bool = False
    fix_missing_track: bool = False
    fix_missing_milestone: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    """Where the per-run audit record is written."""

    enabled: bool = True
    path: str = DEFAULT_TELEMETRY_PATH


@dataclass(frozen=True)
class StaleConfig:
    """Stale issue detection."""

    enabled: bool = False
    days: int = DEFAULT_STALE_DAYS


@dataclass(frozen=True)
class EngineConfig:
    """Closed, validated configuration produced by the normalizer.

    ``tracks`` keeps the declaration order of the document; the classifier
    relies on it for its first-match policy.
    """

    tracks: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen_mapping)
    milestone_rules: Mapping[str, str] = field(default_factory=_frozen_mapping)
    self_healing: SelfHealingConfig = field(default_factory=SelfHealingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    stale: StaleConfig = field(default_factory=StaleConfig)

    @classmethod
    def build(
        cls,
        tracks: Mapping[str, list[str] | tuple[str, ...]] | None = None,
        milestone_rules: Mapping[str, str] | None = None,
        self_healing: SelfHealingConfig | None = None,
        telemetry: TelemetryConfig | None = None,
        stale: StaleConfig | None = None,
    ) -> EngineConfig:
        """Create a config with read-only mappings from plain values."""
        return cls(
            tracks=_frozen_mapping({name: tuple(patterns) for name, patterns in (tracks or {}).items()}),
            milestone_rules=_frozen_mapping(milestone_rules),
            self_healing=self_healing or SelfHealingConfig(),
            telemetry=telemetry or TelemetryConfig(),
            stale=stale or StaleConfig(),
        )

    def to_dict(self) -> dict:
        return {
            "tracks": {name: list(patterns) for name, patterns in self.tracks.items()},
            "milestone_rules": dict(self.milestone_rules),
            "self_healing": {
                "enabled": self.self_healing.enabled,
                "fix_missing_track": self.self_healing.fix_missing_track,
                "fix_missing_milestone": self.self_healing.fix_missing_milestone,
            },
            "telemetry": {
                "enabled": self.telemetry.enabled,
                "path": self.telemetry.path,
            },
            "stale": {
                "enabled": self.stale.enabled,
                "days": self.stale.days,
            },
        }
