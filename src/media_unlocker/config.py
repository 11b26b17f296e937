"""Configuration loading from environment and caller overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from media_unlocker.errors import ConfigurationError, ScriptLoadFailure
from media_unlocker.schemas import UnlockerConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "MEDIA_UNLOCKER_"
_ENV_FIELDS = {
    "TARGET": "target_name",
    "SCRIPT": "script_path",
    "SOURCE_DIR": "source_dir",
    "OUTPUT_DIR": "output_dir",
}


def load_config(
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> UnlockerConfig:
    """Build configuration from ``MEDIA_UNLOCKER_*`` variables and overrides.

    Overrides whose value is ``None`` are ignored so CLI options that were not
    supplied fall back to the environment, then to model defaults.
    """
    env = os.environ if environ is None else environ
    payload: dict[str, object] = {}
    for suffix, field in _ENV_FIELDS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value:
            payload[field] = value
    for key, value in (overrides or {}).items():
        if value is not None:
            payload[key] = value
    try:
        config = UnlockerConfig(**payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    logger.debug("loaded configuration: %s", config)
    return config


def read_script_source(path: Path) -> str:
    """Read collaborator script text, mapping I/O errors to ``ScriptLoadFailure``."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScriptLoadFailure(f"Cannot read script {path}: {exc}") from exc
