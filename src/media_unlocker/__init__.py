"""Top-level API for converting encrypted media through an attached script."""

from __future__ import annotations

from pathlib import Path

from media_unlocker.application.results import RunReport

__version__ = "0.1.0"


def convert_file(
    source_path: Path,
    *,
    target_name: str | None = None,
    script_path: Path | None = None,
) -> RunReport:
    """Convert one encrypted media file next to itself.

    Parameters
    ----------
    source_path : Path
        ``.mflac`` / ``.mgg`` container to convert.
    target_name : str, optional
        Case-insensitive process name fragment. Defaults to configuration.
    script_path : Path, optional
        Collaborator script exposing ``decrypt``. Defaults to configuration.

    Returns
    -------
    RunReport
        Outcome of the single conversion.
    """
    from .api import convert_file as _impl

    return _impl(source_path, target_name=target_name, script_path=script_path)


def convert_folder(
    source_dir: Path | None = None,
    output_dir: Path | None = None,
    *,
    keep_going: bool = False,
) -> RunReport:
    """Convert every eligible file of a directory.

    Parameters
    ----------
    source_dir : Path | None, default=None
        Directory scanned non-recursively. Defaults to configuration.
    output_dir : Path | None, default=None
        Destination directory, created if absent. Defaults to configuration.
    keep_going : bool, default=False
        Continue past per-file failures instead of aborting.
    """
    from .api import convert_folder as _impl

    return _impl(source_dir, output_dir, keep_going=keep_going)


__all__ = [
    "convert_file",
    "convert_folder",
]
