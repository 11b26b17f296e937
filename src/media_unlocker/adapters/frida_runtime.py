"""Frida-backed instrumentation runtime, session, and loaded script."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import frida
from frida.core import RPCException

from media_unlocker.application.results import TargetProcess
from media_unlocker.errors import AttachFailure, RemoteCallFailure, ScriptLoadFailure
from media_unlocker.types import MessageHandler

logger = logging.getLogger(__name__)

_ATTACH_ERRORS: tuple[type[Exception], ...] = (
    frida.ProcessNotFoundError,
    frida.ProcessNotRespondingError,
    frida.PermissionDeniedError,
    frida.NotSupportedError,
    frida.ServerNotRunningError,
    frida.TransportError,
)
_LOAD_ERRORS: tuple[type[Exception], ...] = (
    frida.InvalidArgumentError,
    frida.InvalidOperationError,
    frida.NotSupportedError,
    frida.TransportError,
    frida.ProcessNotRespondingError,
)
_CALL_ERRORS: tuple[type[Exception], ...] = (
    RPCException,
    frida.InvalidOperationError,
    frida.ProcessNotRespondingError,
    frida.TransportError,
)


class FridaScript:
    """Loaded collaborator script with a blocking call surface."""

    def __init__(self, script: Any) -> None:
        self._script = script

    def call(self, export_name: str, args: Sequence[object]) -> object:
        """Invoke ``export_name`` inside the target process.

        Blocks the calling thread until the export returns. There is no
        timeout; a hung export blocks indefinitely.

        Raises
        ------
        RemoteCallFailure
            If the export is missing, throws, or the session was lost.
        """
        try:
            method = getattr(self._script.exports_sync, export_name)
            return method(*args)
        except _CALL_ERRORS as exc:
            raise RemoteCallFailure(export_name, str(exc)) from exc

    def unload(self) -> None:
        self._script.unload()


class FridaSession:
    """Attached Frida session owning the scripts it loads."""

    def __init__(self, session: Any, process: TargetProcess) -> None:
        self._session = session
        self._process = process
        self._scripts: list[FridaScript] = []
        self._closed = False
        self._session.on("detached", self._on_detached)

    @property
    def process(self) -> TargetProcess:
        return self._process

    def _on_detached(self, reason: object, crash: object = None) -> None:
        if crash is not None:
            logger.warning("session to %s detached (%s): %s", self._process.name, reason, crash)
        else:
            logger.info("session to %s detached (%s)", self._process.name, reason)

    def load(self, script_source: str, on_message: MessageHandler) -> FridaScript:
        """Compile and activate ``script_source`` with ``on_message`` wired first.

        The handler is registered before ``load()`` so messages emitted during
        script initialization are delivered.

        Raises
        ------
        ScriptLoadFailure
            On compile or activation errors.
        """
        try:
            script = self._session.create_script(script_source)
        except _LOAD_ERRORS as exc:
            raise ScriptLoadFailure(f"Script compilation failed: {exc}") from exc
        script.on("message", on_message)
        try:
            script.load()
        except _LOAD_ERRORS as exc:
            raise ScriptLoadFailure(f"Script activation failed: {exc}") from exc
        loaded = FridaScript(script)
        self._scripts.append(loaded)
        logger.debug("script loaded into pid %d", self._process.pid)
        return loaded

    def close(self) -> None:
        """Unload scripts and detach. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for script in self._scripts:
            try:
                script.unload()
            except (frida.InvalidOperationError, frida.TransportError) as exc:
                logger.debug("script unload skipped: %s", exc)
        self._scripts.clear()
        try:
            self._session.detach()
        except (frida.InvalidOperationError, frida.TransportError) as exc:
            logger.debug("detach skipped: %s", exc)

    def __enter__(self) -> FridaSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FridaRuntime:
    """Explicitly constructed handle on the local Frida device.

    Parameters
    ----------
    device : Any, optional
        Pre-obtained Frida device. Defaults to ``frida.get_local_device()``.
    """

    def __init__(self, device: Any | None = None) -> None:
        if device is None:
            try:
                device = frida.get_local_device()
            except _ATTACH_ERRORS as exc:
                raise AttachFailure(f"Cannot open local device: {exc}") from exc
        self._device = device

    @property
    def device_name(self) -> str:
        return str(self._device.name)

    @property
    def version(self) -> str:
        return frida.__version__

    def enumerate_processes(self) -> list[TargetProcess]:
        """List processes visible on the device in enumeration order."""
        try:
            processes = self._device.enumerate_processes()
        except _ATTACH_ERRORS as exc:
            raise AttachFailure(f"Cannot enumerate processes: {exc}") from exc
        return [TargetProcess(pid=p.pid, name=p.name) for p in processes]

    def attach(self, process: TargetProcess) -> FridaSession:
        """Attach to ``process``.

        Raises
        ------
        AttachFailure
            If the process exited or attachment was refused.
        """
        try:
            session = self._device.attach(process.pid)
        except _ATTACH_ERRORS as exc:
            raise AttachFailure(
                f"Cannot attach to {process.name} (pid {process.pid}): {exc}"
            ) from exc
        logger.info("attached to %s (pid %d)", process.name, process.pid)
        return FridaSession(session, process)
