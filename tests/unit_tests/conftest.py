"""Test doubles for the instrumentation runtime boundary."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from media_unlocker.application.results import TargetProcess
from media_unlocker.errors import RemoteCallFailure
from media_unlocker.schemas import UnlockerConfig
from media_unlocker.types import MessageHandler


class FakeScript:
    """Remote script double that writes a payload to the destination path."""

    def __init__(
        self,
        payload: bytes = b"fLaC",
        error: str | None = None,
        write_output: bool = True,
    ) -> None:
        self.payload = payload
        self.error = error
        self.write_output = write_output
        self.calls: list[tuple[str, list[object]]] = []
        self.on_message: MessageHandler | None = None

    def call(self, export_name: str, args: Sequence[object]) -> object:
        self.calls.append((export_name, list(args)))
        if self.on_message is not None:
            self.on_message({"type": "send", "payload": f"decrypting {args[0]}"}, None)
        if self.error is not None:
            raise RemoteCallFailure(export_name, self.error)
        if self.write_output:
            Path(str(args[1])).write_bytes(self.payload)
        return None


class FakeSession:
    """Session double recording load and close."""

    def __init__(self, script: FakeScript) -> None:
        self.script = script
        self.loaded_sources: list[str] = []
        self.closed = False

    def load(self, script_source: str, on_message: MessageHandler) -> FakeScript:
        self.loaded_sources.append(script_source)
        self.script.on_message = on_message
        return self.script

    def close(self) -> None:
        self.closed = True


class FakeRuntime:
    """Runtime double with a fixed process table."""

    def __init__(
        self,
        processes: Sequence[TargetProcess] = (TargetProcess(pid=4242, name="QQMusic.exe"),),
        script: FakeScript | None = None,
    ) -> None:
        self.processes = list(processes)
        self.session = FakeSession(script or FakeScript())
        self.attached: list[TargetProcess] = []

    @property
    def device_name(self) -> str:
        return "Local System"

    @property
    def version(self) -> str:
        return "0.0-test"

    def enumerate_processes(self) -> list[TargetProcess]:
        return list(self.processes)

    def attach(self, process: TargetProcess) -> FakeSession:
        self.attached.append(process)
        return self.session


@pytest.fixture
def script_file(tmp_path: Path) -> Path:
    path = tmp_path / "hook.js"
    path.write_text("rpc.exports = { decrypt(src, dst) {} };", encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path: Path, script_file: Path) -> UnlockerConfig:
    return UnlockerConfig(
        script_path=script_file,
        source_dir=tmp_path / "input",
        output_dir=tmp_path / "output",
    )


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def make_script() -> type[FakeScript]:
    return FakeScript


@pytest.fixture
def make_runtime() -> type[FakeRuntime]:
    return FakeRuntime
