"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from media_unlocker.types import OutcomeStatus


@dataclass(frozen=True)
class TargetProcess:
    """Process selected for attachment."""

    pid: int
    name: str


@dataclass(frozen=True)
class ConversionOutcome:
    """Structured per-file conversion outcome."""

    source_path: Path
    target_path: Path | None
    status: OutcomeStatus
    detail: str | None = None


@dataclass(frozen=True)
class RunReport:
    """Ordered outcomes of one runner invocation."""

    outcomes: tuple[ConversionOutcome, ...] = ()

    @property
    def converted(self) -> tuple[ConversionOutcome, ...]:
        return tuple(o for o in self.outcomes if o.status == "converted")

    @property
    def skipped(self) -> tuple[ConversionOutcome, ...]:
        return tuple(o for o in self.outcomes if o.status == "skipped")

    @property
    def failed(self) -> tuple[ConversionOutcome, ...]:
        return tuple(o for o in self.outcomes if o.status == "failed")

    @property
    def ok(self) -> bool:
        """``True`` when no file failed."""
        return not self.failed
