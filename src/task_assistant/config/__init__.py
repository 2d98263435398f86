"""Engine configuration: typed model, normalizer and document loader."""

from task_assistant.config.loader import DEFAULT_CONFIG_PATH, load_config
from task_assistant.config.models import EngineConfig, SelfHealingConfig, StaleConfig, TelemetryConfig
from task_assistant.config.normalizer import ConfigNormalizer, normalize

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigNormalizer",
    "EngineConfig",
    "SelfHealingConfig",
    "StaleConfig",
    "TelemetryConfig",
    "load_config",
    "normalize",
]
