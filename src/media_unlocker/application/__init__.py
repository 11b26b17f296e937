"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from media_unlocker.application.options import BatchOptions, RunOptions
from media_unlocker.application.ports import InstrumentationRuntime
from media_unlocker.application.results import ConversionOutcome, RunReport, TargetProcess
from media_unlocker.schemas import UnlockerConfig
from media_unlocker.types import MessageHandler


def convert_single_file(
    *,
    source_path: Path,
    config: UnlockerConfig,
    options: RunOptions | None = None,
    runtime: InstrumentationRuntime | None = None,
    on_message: MessageHandler | None = None,
) -> RunReport:
    """Convert one file via lazy use-case import."""
    from media_unlocker.application.use_cases import convert_single_file as _impl

    return _impl(
        source_path=source_path,
        config=config,
        options=options,
        runtime=runtime,
        on_message=on_message,
    )


def convert_directory(
    *,
    config: UnlockerConfig,
    options: RunOptions | None = None,
    runtime: InstrumentationRuntime | None = None,
    on_message: MessageHandler | None = None,
) -> RunReport:
    """Convert a source directory via lazy use-case import."""
    from media_unlocker.application.use_cases import convert_directory as _impl

    return _impl(
        config=config,
        options=options,
        runtime=runtime,
        on_message=on_message,
    )


__all__ = [
    "BatchOptions",
    "ConversionOutcome",
    "RunOptions",
    "RunReport",
    "TargetProcess",
    "convert_single_file",
    "convert_directory",
]
