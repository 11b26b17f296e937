"""Application use-cases: single-file and batch runners."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from media_unlocker.adapters.process_locator import ProcessLocator
from media_unlocker.application.options import BatchOptions, RunOptions
from media_unlocker.application.ports import InstrumentationRuntime, RemoteScript
from media_unlocker.application.results import ConversionOutcome, RunReport
from media_unlocker.config import read_script_source
from media_unlocker.converter.core import ConversionJob, plan_job, run_job
from media_unlocker.errors import (
    DirectoryResolutionFailure,
    FileNotFound,
    NotAFile,
    PublishFailure,
    RemoteCallFailure,
)
from media_unlocker.infrastructure.message_sink import MessageSink
from media_unlocker.routing import ExtensionRouter
from media_unlocker.schemas import UnlockerConfig
from media_unlocker.types import MessageHandler

logger = logging.getLogger(__name__)


def _default_runtime() -> InstrumentationRuntime:
    from media_unlocker.adapters.frida_runtime import FridaRuntime

    return FridaRuntime()


@contextmanager
def open_remote_script(
    *,
    config: UnlockerConfig,
    runtime: InstrumentationRuntime,
    on_message: MessageHandler,
) -> Iterator[RemoteScript]:
    """Locate the target, attach, and load the collaborator script.

    The session is detached when the block exits.
    """
    script_source = read_script_source(config.script_path)
    logger.info("runtime %s on device %s", runtime.version, runtime.device_name)
    process = ProcessLocator(runtime).find_target(config.target_name)
    session = runtime.attach(process)
    try:
        yield session.load(script_source, on_message)
    finally:
        session.close()


def convert_single_file(
    *,
    source_path: Path,
    config: UnlockerConfig,
    options: RunOptions | None = None,
    runtime: InstrumentationRuntime | None = None,
    on_message: MessageHandler | None = None,
) -> RunReport:
    """Use-case: convert one externally supplied file next to itself.

    Unsupported extensions fail the run, since the caller named this file
    explicitly.

    Raises
    ------
    FileNotFound, NotAFile
        If ``source_path`` is missing or not a regular file.
    DirectoryResolutionFailure
        If the parent directory cannot be resolved.
    UnsupportedExtension
        If the extension has no mapping.
    """
    options = options or RunOptions()
    if not source_path.exists():
        raise FileNotFound(source_path)
    if not source_path.is_file():
        raise NotAFile(source_path)
    try:
        destination_dir = source_path.resolve().parent
    except OSError as exc:
        raise DirectoryResolutionFailure(
            f"Cannot determine directory of {source_path}: {exc}"
        ) from exc

    router = ExtensionRouter(config.extension_map)
    job = plan_job(source_path, destination_dir, router)

    runtime = runtime or _default_runtime()
    with open_remote_script(
        config=config,
        runtime=runtime,
        on_message=on_message or MessageSink(),
    ) as script:
        outcome = run_job(script, job, export_name=options.export_name)
    return RunReport(outcomes=(outcome,))


def scan_source_dir(source_dir: Path, router: ExtensionRouter) -> list[Path]:
    """Return eligible regular files directly under ``source_dir``, sorted by name.

    Ineligible files are skipped silently.
    """
    if not source_dir.exists():
        raise DirectoryResolutionFailure(f"Source directory does not exist: {source_dir}")
    if not source_dir.is_dir():
        raise DirectoryResolutionFailure(f"Source path is not a directory: {source_dir}")
    eligible: list[Path] = []
    for entry in sorted(source_dir.iterdir()):
        if not entry.is_file():
            continue
        if not router.is_eligible(entry):
            logger.debug("skipping ineligible file: %s", entry)
            continue
        eligible.append(entry)
    return eligible


def _ensure_output_dir(output_dir: Path) -> Path:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryResolutionFailure(
            f"Cannot create output directory {output_dir}: {exc}"
        ) from exc
    return output_dir


def _run_batch_job(
    script: RemoteScript,
    job: ConversionJob,
    options: RunOptions,
    batch: BatchOptions,
) -> ConversionOutcome:
    try:
        return run_job(script, job, export_name=options.export_name)
    except (RemoteCallFailure, PublishFailure) as exc:
        if not batch.keep_going:
            raise
        logger.warning("conversion failed for %s: %s", job.source_path, exc)
        return ConversionOutcome(
            source_path=job.source_path,
            target_path=job.target_path,
            status="failed",
            detail=str(exc),
        )


def convert_directory(
    *,
    config: UnlockerConfig,
    options: RunOptions | None = None,
    runtime: InstrumentationRuntime | None = None,
    on_message: MessageHandler | None = None,
) -> RunReport:
    """Use-case: convert every eligible file in ``config.source_dir``.

    Files are processed sequentially over one session. By default the first
    remote-call or publish failure aborts the batch; with
    ``options.batch.keep_going`` the failure is recorded and the batch
    continues.
    """
    options = options or RunOptions()
    router = ExtensionRouter(config.extension_map)
    sources = scan_source_dir(config.source_dir, router)
    output_dir = _ensure_output_dir(config.output_dir)
    if not sources:
        logger.info("no eligible files in %s", config.source_dir)
        return RunReport()

    jobs = [plan_job(source, output_dir, router) for source in sources]
    outcomes: list[ConversionOutcome] = []
    runtime = runtime or _default_runtime()
    with open_remote_script(
        config=config,
        runtime=runtime,
        on_message=on_message or MessageSink(),
    ) as script:
        for job in jobs:
            outcomes.append(_run_batch_job(script, job, options, options.batch))
    return RunReport(outcomes=tuple(outcomes))


def build_run_options(*, keep_going: bool = False) -> RunOptions:
    """Build typed option object from command/API params."""
    return RunOptions(batch=BatchOptions(keep_going=keep_going))
