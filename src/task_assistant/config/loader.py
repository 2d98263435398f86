"""Reads the configuration document (YAML or JSON) from disk.

Never raises: a missing or unparseable file yields the all-default config.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from task_assistant.config.models import EngineConfig
from task_assistant.config.normalizer import ConfigNormalizer, canonical_key
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = ".github/task-assistant.yml"


def read_document(path: Path) -> Any:
    """Parse ``path`` as YAML (JSON is accepted as a YAML subset).

    Returns ``None`` when the file is missing, unreadable or malformed.
    """
    if not path.exists():
        logger.warning("config_file_not_found", path=str(path))
        return None

    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.warning("config_file_unparseable", path=str(path), error=str(e))
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("config_file_unreadable", path=str(path), error=str(e))
        return None


def apply_overrides(document: Any, overrides: Mapping[str, Any] | None) -> Any:
    """Replace document sections with ``overrides`` (matched case/hyphen-insensitively)."""
    if not overrides:
        return document

    merged: dict[str, Any] = dict(document) if isinstance(document, dict) else {}
    for key, value in overrides.items():
        canon = canonical_key(key)
        for existing in [k for k in merged if canonical_key(k) == canon]:
            del merged[existing]
        merged[key] = value
        logger.debug("config_section_overridden", section=key)
    return merged


def load_config(
    path: str | Path = DEFAULT_CONFIG_PATH,
    overrides: Mapping[str, Any] | None = None,
    normalizer: ConfigNormalizer | None = None,
) -> EngineConfig:
    """
    Load and normalize the configuration document.

    Args:
        path: YAML/JSON document location
        overrides: Sections replacing the document's own (from the environment)
        normalizer: Collects warnings when the caller wants to inspect them

    Returns:
        A fully defaulted EngineConfig. Never raises.
    """
    document = apply_overrides(read_document(Path(path)), overrides)
    config = (normalizer or ConfigNormalizer()).normalize(document)
    logger.debug(
        "config_loaded",
        path=str(path),
        tracks=list(config.tracks),
        self_healing=config.self_healing.enabled,
    )
    return config
