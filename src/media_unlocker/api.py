"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from media_unlocker.application.ports import InstrumentationRuntime
from media_unlocker.application.results import RunReport
from media_unlocker.application.use_cases import build_run_options
from media_unlocker.application.use_cases import convert_directory
from media_unlocker.application.use_cases import convert_single_file
from media_unlocker.config import load_config


def convert_file(
    source_path: Path,
    *,
    target_name: Optional[str] = None,
    script_path: Optional[Path] = None,
    runtime: Optional[InstrumentationRuntime] = None,
) -> RunReport:
    """Convert one encrypted file into the same directory."""
    config = load_config({"target_name": target_name, "script_path": script_path})
    return convert_single_file(
        source_path=source_path,
        config=config,
        options=build_run_options(),
        runtime=runtime,
    )


def convert_folder(
    source_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    *,
    target_name: Optional[str] = None,
    script_path: Optional[Path] = None,
    keep_going: bool = False,
    runtime: Optional[InstrumentationRuntime] = None,
) -> RunReport:
    """Convert every eligible file of ``source_dir`` into ``output_dir``."""
    config = load_config(
        {
            "source_dir": source_dir,
            "output_dir": output_dir,
            "target_name": target_name,
            "script_path": script_path,
        }
    )
    return convert_directory(
        config=config,
        options=build_run_options(keep_going=keep_going),
        runtime=runtime,
    )
