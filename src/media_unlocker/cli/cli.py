#!/usr/bin/env python3
"""
media_unlocker.cli.cli

Typer-based CLI that converts encrypted media files through a script
attached to the running player process.

Examples
--------
Convert one file next to itself (also what drag-and-drop onto the
executable does):

    media-unlocker ~/Music/song.mflac --script hook_qq_music.js

Convert every eligible file of a directory:

    media-unlocker --batch --source-dir ./input --output-dir ./output
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from media_unlocker import __version__
from media_unlocker.application.results import RunReport
from media_unlocker.errors import UnlockerError

app = typer.Typer(
    name="media-unlocker",
    help="Convert .mflac/.mgg files via the running player's decrypt export.",
    add_completion=False,
)

ACK_PROMPT = "Press Enter to exit..."
NO_INPUT_MESSAGE = "No input file given."


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _wait_for_enter(wait: bool, prompt: str = ACK_PROMPT) -> None:
    """Block until the user acknowledges, so a closing console shows the message."""
    if not wait:
        return
    typer.echo(prompt)
    sys.stdin.readline()


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception that aborted the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _echo_report(report: RunReport) -> None:
    for outcome in report.outcomes:
        if outcome.status == "converted":
            typer.echo(f"[*] Done: {outcome.target_path}")
        elif outcome.status == "skipped":
            typer.echo(f"[*] Target exists, skipped: {outcome.target_path}")
        else:
            typer.echo(f"[!] Failed: {outcome.source_path}: {outcome.detail}", err=True)
    if len(report.outcomes) != 1:
        typer.echo(
            f"[*] converted={len(report.converted)} "
            f"skipped={len(report.skipped)} failed={len(report.failed)}"
        )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"media-unlocker {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Path | None = typer.Argument(
        None,
        help="Encrypted file to convert into its own directory.",
    ),
    batch: bool = typer.Option(
        False,
        "--batch",
        help="Convert every eligible file of the source directory.",
    ),
    source_dir: Path | None = typer.Option(
        None, "--source-dir", help="Batch source directory (non-recursive)."
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", help="Batch output directory, created if absent."
    ),
    target: str | None = typer.Option(
        None, "--target", help="Case-insensitive process name fragment."
    ),
    script: Path | None = typer.Option(
        None, "--script", help="Collaborator script exposing decrypt(src, dst)."
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        help="In batch mode, record per-file failures and continue.",
    ),
    wait: bool = typer.Option(
        True,
        "--wait/--no-wait",
        help="Wait for Enter before exiting on error or missing input.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug logging and full tracebacks."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Convert one file, or a whole directory with ``--batch``.

    Parameters
    ----------
    path : Path | None
        File supplied by the user; its parent directory receives the output.
    batch : bool, default=False
        Run the batch converter over ``--source-dir`` instead.
    wait : bool, default=True
        Whether to block for acknowledgement before exiting on error.

    Notes
    -----
    - An unsupported extension on ``path`` fails the run; in batch mode
      ineligible files are skipped silently.
    """
    del version
    _configure_logging(debug)

    if path is None and not batch:
        typer.echo(NO_INPUT_MESSAGE)
        _wait_for_enter(wait)
        return
    if path is not None and batch:
        raise typer.BadParameter("PATH cannot be combined with --batch.")

    try:
        from media_unlocker.application.use_cases import (
            build_run_options,
            convert_directory,
            convert_single_file,
        )
        from media_unlocker.config import load_config

        config = load_config(
            {
                "target_name": target,
                "script_path": script,
                "source_dir": source_dir,
                "output_dir": output_dir,
            }
        )
        options = build_run_options(keep_going=keep_going)
        if path is not None:
            typer.echo(f"[*] Received file: {path}")
            report = convert_single_file(source_path=path, config=config, options=options)
        else:
            typer.echo(f"[*] Scanning: {config.source_dir}")
            report = convert_directory(config=config, options=options)
        _echo_report(report)
    except UnlockerError as exc:
        code = _print_error(exc, debug)
        _wait_for_enter(wait)
        raise typer.Exit(code=code)
    except Exception as exc:
        # Unexpected crash: always include the traceback.
        code = _print_error(exc, debug=True)
        _wait_for_enter(wait)
        raise typer.Exit(code=code)

    if not report.ok:
        _wait_for_enter(wait)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
