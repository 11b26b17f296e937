"""Typed option objects shared across runner use-cases."""

from __future__ import annotations

from dataclasses import dataclass

DECRYPT_EXPORT = "decrypt"


@dataclass(frozen=True)
class BatchOptions:
    """Batch runner behavior toggles.

    Parameters
    ----------
    keep_going : bool, default=False
        Record remote-call and publish failures per file and continue
        instead of aborting the whole batch.
    """

    keep_going: bool = False


@dataclass(frozen=True)
class RunOptions:
    """Shared options passed through runner use-cases."""

    export_name: str = DECRYPT_EXPORT
    batch: BatchOptions = BatchOptions()
