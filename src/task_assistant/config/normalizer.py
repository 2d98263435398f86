"""Turns an arbitrary, possibly malformed document into an EngineConfig.

Never raises. Every malformed section is dropped with a warning and replaced
by its default, so downstream components only ever see a fully typed config.
"""

from __future__ import annotations

from typing import Any, Callable

from task_assistant.config.models import (
    DEFAULT_STALE_DAYS,
    DEFAULT_TELEMETRY_PATH,
    EngineConfig,
    SelfHealingConfig,
    StaleConfig,
    TelemetryConfig,
)
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

_DISPLAY_NAMES = {
    "fixmissingtrack": "fix_missing_track",
    "fixmissingmilestone": "fix_missing_milestone",
}


def canonical_key(key: Any) -> str:
    """Fold case, hyphens and underscores: ``self-healing`` == ``selfHealing``."""
    return str(key).lower().replace("-", "").replace("_", "")


class ConfigNormalizer:
    """Validates one raw document and collects the warnings it produced."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self._sections: dict[str, Callable[[Any], Any]] = {
            "tracks": self._tracks,
            "milestonerules": self._milestone_rules,
            "selfhealing": self._self_healing,
            "telemetry": self._telemetry,
            "stale": self._stale,
        }

    def normalize(self, raw: Any) -> EngineConfig:
        """Return a fully defaulted EngineConfig for ``raw``."""
        if raw is None:
            self._warn("config_document_empty", "Config document is empty. Using defaults.")
            return EngineConfig()

        if not isinstance(raw, dict):
            self._warn(
                "config_document_invalid",
                f"Config document should be a mapping, got {type(raw).__name__}. Using defaults.",
            )
            return EngineConfig()

        found: dict[str, tuple[str, Any]] = {}
        for key, value in raw.items():
            canon = canonical_key(key)
            if canon not in self._sections:
                self._warn("config_unknown_key", f"Unknown config key '{key}' - ignoring.", key=str(key))
                continue
            if canon in found:
                self._warn(
                    "config_duplicate_key",
                    f"Config key '{key}' duplicates '{found[canon][0]}'. The later one wins.",
                    key=str(key),
                )
            found[canon] = (str(key), value)

        values = {canon: self._sections[canon](value) for canon, (_, value) in found.items()}

        return EngineConfig.build(
            tracks=values.get("tracks"),
            milestone_rules=values.get("milestonerules"),
            self_healing=values.get("selfhealing"),
            telemetry=values.get("telemetry"),
            stale=values.get("stale"),
        )

    # -- sections -----------------------------------------------------------

    def _tracks(self, value: Any) -> dict[str, list[str]]:
        if value is None:
            return {}

        if not isinstance(value, dict):
            self._warn(
                "config_tracks_invalid",
                "tracks should be a mapping of track name to a list of label patterns. Ignoring tracks section.",
            )
            return {}

        tracks: dict[str, list[str]] = {}
        for name, patterns in value.items():
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                self._warn(
                    "config_track_invalid",
                    f"tracks.{name} should be a list of strings. Ignoring this track.",
                    track=str(name),
                )
                continue
            tracks[str(name)] = list(patterns)

        if not tracks:
            self._warn("config_tracks_empty", "No valid tracks configured - no issue will match a track.")

        return tracks

    def _milestone_rules(self, value: Any) -> dict[str, str]:
        if value is None:
            return {}

        if not isinstance(value, dict):
            self._warn(
                "config_milestone_rules_invalid",
                "milestone_rules should be a mapping of track name to milestone title. Ignoring section.",
            )
            return {}

        rules: dict[str, str] = {}
        for track, title in value.items():
            if not isinstance(title, str):
                self._warn(
                    "config_milestone_rule_invalid",
                    f"milestone_rules.{track} must be a string. Ignoring this rule.",
                    track=str(track),
                )
                continue
            rules[str(track)] = title
        return rules

    def _self_healing(self, value: Any) -> SelfHealingConfig:
        if value is None:
            return SelfHealingConfig()

        if not isinstance(value, dict):
            self._warn(
                "config_self_healing_invalid",
                "self_healing should be a mapping. Self-healing disabled.",
            )
            return SelfHealingConfig()

        entries = self._sub_keys("self_healing", value, {"enabled", "fixmissingtrack", "fixmissingmilestone"})
        return SelfHealingConfig(
            enabled=self._flag("self_healing", "enabled", entries, default=False),
            fix_missing_track=self._flag("self_healing", "fixmissingtrack", entries, default=False),
            fix_missing_milestone=self._flag("self_healing", "fixmissingmilestone", entries, default=False),
        )

    def _telemetry(self, value: Any) -> TelemetryConfig:
        if value is None:
            return TelemetryConfig()

        if not isinstance(value, dict):
            self._warn("config_telemetry_invalid", "telemetry should be a mapping. Using defaults.")
            return TelemetryConfig()

        entries = self._sub_keys("telemetry", value, {"enabled", "path"})

        enabled = self._flag("telemetry", "enabled", entries, default=True)

        path = DEFAULT_TELEMETRY_PATH
        raw_path = entries.get("path")
        if "path" in entries and not isinstance(raw_path, str):
            self._warn(
                "config_telemetry_path_invalid",
                f"telemetry.path must be a string. Using default '{DEFAULT_TELEMETRY_PATH}'.",
            )
        elif raw_path:
            path = raw_path

        return TelemetryConfig(enabled=enabled, path=path)

    def _stale(self, value: Any) -> StaleConfig:
        if value is None:
            return StaleConfig()

        if not isinstance(value, dict):
            self._warn("config_stale_invalid", "stale should be a mapping. Stale detection disabled.")
            return StaleConfig()

        entries = self._sub_keys("stale", value, {"enabled", "days"})
        enabled = self._flag("stale", "enabled", entries, default=False)

        days = DEFAULT_STALE_DAYS
        if "days" in entries:
            raw_days = entries["days"]
            if isinstance(raw_days, int) and not isinstance(raw_days, bool) and raw_days > 0:
                days = raw_days
            else:
                self._warn(
                    "config_stale_days_invalid",
                    f"stale.days should be a positive integer. Defaulting to {DEFAULT_STALE_DAYS}.",
                )

        return StaleConfig(enabled=enabled, days=days)

    # -- helpers ------------------------------------------------------------

    def _sub_keys(self, section: str, value: dict, known: set[str]) -> dict[str, Any]:
        entries: dict[str, Any] = {}
        for key, item in value.items():
            canon = canonical_key(key)
            if canon not in known:
                self._warn(
                    "config_unknown_key",
                    f"Unknown config key '{section}.{key}' - ignoring.",
                    key=f"{section}.{key}",
                )
                continue
            entries[canon] = item
        return entries

    def _flag(self, section: str, name: str, entries: dict[str, Any], default: bool) -> bool:
        """A boolean sub-flag. Present but non-boolean values warn and fall back to ``default``."""
        if name not in entries:
            return default
        item = entries[name]
        if isinstance(item, bool):
            return item
        self._warn(
            "config_flag_invalid",
            f"{section}.{_DISPLAY_NAMES.get(name, name)} should be boolean. Defaulting to {str(default).lower()}.",
            flag=f"{section}.{_DISPLAY_NAMES.get(name, name)}",
        )
        return default

    def _warn(self, event: str, message: str, **context: Any) -> None:
        self.warnings.append(message)
        logger.warning(event, message=message, **context)


def normalize(raw: Any) -> EngineConfig:
    """Normalize ``raw`` into an EngineConfig. Never raises."""
    return ConfigNormalizer().normalize(raw)
