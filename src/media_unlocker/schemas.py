"""Pydantic schemas for runtime validation of runner configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from media_unlocker.routing import DEFAULT_EXTENSION_MAP
from media_unlocker.types import ExtensionTable


class UnlockerConfig(BaseModel):
    """Validated settings shared by the single-file and batch runners."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_name: str = "qqmusic"
    script_path: Path = Path("hook_qq_music.js")
    source_dir: Path = Path("input")
    output_dir: Path = Path("output")
    extension_map: ExtensionTable = Field(default=DEFAULT_EXTENSION_MAP)

    @field_validator("target_name")
    @classmethod
    def _validate_target_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("target_name cannot be empty.")
        return cleaned

    @field_validator("extension_map")
    @classmethod
    def _validate_extension_map(cls, value: ExtensionTable) -> ExtensionTable:
        if not value:
            raise ValueError("extension_map must contain at least one entry.")
        seen: set[str] = set()
        normalized: list[tuple[str, str]] = []
        for source, target in value:
            source_key = source.strip().lower()
            target_ext = target.strip()
            if not source_key or not target_ext:
                raise ValueError("extension_map entries cannot be empty.")
            if "." in source_key or "." in target_ext:
                raise ValueError("extension_map entries must not contain dots.")
            if source_key in seen:
                raise ValueError(f"duplicate source extension: {source_key!r}")
            seen.add(source_key)
            normalized.append((source_key, target_ext))
        return tuple(normalized)
