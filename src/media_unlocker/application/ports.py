"""Application ports for the instrumentation runtime boundary."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from media_unlocker.application.results import TargetProcess
from media_unlocker.types import MessageHandler


class RemoteScript(Protocol):
    """Loaded collaborator script exposing remote-callable exports."""

    def call(self, export_name: str, args: Sequence[object]) -> object:
        """Invoke an export and block until it returns."""


class InstrumentationSessionPort(Protocol):
    """Attached session able to load collaborator scripts."""

    def load(self, script_source: str, on_message: MessageHandler) -> RemoteScript:
        """Compile, wire the message handler, and activate a script."""

    def close(self) -> None:
        """Unload scripts and detach from the process."""


class InstrumentationRuntime(Protocol):
    """Explicitly owned handle on the local instrumentation device."""

    @property
    def device_name(self) -> str:
        """Human-readable device name."""

    @property
    def version(self) -> str:
        """Instrumentation runtime version."""

    def enumerate_processes(self) -> Sequence[TargetProcess]:
        """List processes visible on the device in enumeration order."""

    def attach(self, process: TargetProcess) -> InstrumentationSessionPort:
        """Attach to ``process`` and return a live session."""
