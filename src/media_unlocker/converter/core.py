"""Per-file conversion job: naming, remote decrypt, atomic publication."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from hashlib import md5
from pathlib import Path

from media_unlocker.application.options import DECRYPT_EXPORT
from media_unlocker.application.ports import RemoteScript
from media_unlocker.application.results import ConversionOutcome
from media_unlocker.errors import PublishFailure, UnsupportedExtension
from media_unlocker.routing import ExtensionRouter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionJob:
    """Planned conversion of one source file.

    Parameters
    ----------
    source_path : Path
        Encrypted container file.
    destination_dir : Path
        Directory receiving the converted output.
    target_path : Path
        Final output path, ``destination_dir / (stem + "." + target_ext)``.
    temp_path : Path
        Content-addressed staging path the remote side writes to.
    """

    source_path: Path
    destination_dir: Path
    target_path: Path
    temp_path: Path


def temp_name_for(target_file_name: str) -> str:
    """Return the hex MD5 digest of the target file name string."""
    return md5(target_file_name.encode("utf-8"), usedforsecurity=False).hexdigest()


def plan_job(
    source_path: Path,
    destination_dir: Path,
    router: ExtensionRouter,
) -> ConversionJob:
    """Compute absolute target and temporary paths for ``source_path``.

    Raises
    ------
    UnsupportedExtension
        If the router has no mapping for the source extension.
    """
    target_ext = router.route(source_path)
    if target_ext is None:
        raise UnsupportedExtension(source_path)
    # The remote side resolves paths against the target process's cwd.
    source_path = source_path.resolve()
    destination_dir = destination_dir.resolve()
    target_name = f"{source_path.stem}.{target_ext}"
    return ConversionJob(
        source_path=source_path,
        destination_dir=destination_dir,
        target_path=destination_dir / target_name,
        temp_path=destination_dir / temp_name_for(target_name),
    )


def publish(temp_path: Path, target_path: Path) -> None:
    """Atomically rename the finished temp file to its final name."""
    try:
        temp_path.replace(target_path)
    except OSError as exc:
        raise PublishFailure(temp_path, target_path, str(exc)) from exc


def run_job(
    script: RemoteScript,
    job: ConversionJob,
    *,
    export_name: str = DECRYPT_EXPORT,
) -> ConversionOutcome:
    """Run one conversion job against the loaded script.

    An existing ``target_path`` is treated as already converted and skipped
    without a remote call.

    Raises
    ------
    RemoteCallFailure
        If the remote export fails; no rename is attempted.
    PublishFailure
        If the temp file cannot be renamed into place.
    """
    if job.target_path.exists():
        logger.info("target exists, skipping: %s", job.target_path)
        return ConversionOutcome(
            source_path=job.source_path,
            target_path=job.target_path,
            status="skipped",
            detail="target already exists",
        )

    logger.info(
        "decrypting %s -> %s (temp: %s)",
        job.source_path,
        job.target_path,
        job.temp_path,
    )
    script.call(export_name, [str(job.source_path), str(job.temp_path)])
    publish(job.temp_path, job.target_path)
    logger.info("converted: %s", job.target_path)
    return ConversionOutcome(
        source_path=job.source_path,
        target_path=job.target_path,
        status="converted",
    )
