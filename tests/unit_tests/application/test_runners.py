"""Unit tests for the single-file and batch runner use-cases."""

from __future__ import annotations

from pathlib import Path

import pytest

from media_unlocker.application.results import TargetProcess
from media_unlocker.application.use_cases import (
    build_run_options,
    convert_directory,
    convert_single_file,
)
from media_unlocker.errors import (
    DirectoryResolutionFailure,
    FileNotFound,
    NotAFile,
    RemoteCallFailure,
    ScriptLoadFailure,
    TargetNotFound,
    UnsupportedExtension,
)


def _quiet(message: object, data: object) -> None:
    del message, data


def test_single_file_converts_next_to_source(tmp_path: Path, config, runtime) -> None:
    """Write song.flac beside song.mflac over one attached session."""
    source = tmp_path / "song.mflac"
    source.write_bytes(b"encrypted")

    report = convert_single_file(
        source_path=source, config=config, runtime=runtime, on_message=_quiet
    )

    assert [o.status for o in report.outcomes] == ["converted"]
    assert (tmp_path / "song.flac").exists()
    assert runtime.attached == [TargetProcess(pid=4242, name="QQMusic.exe")]
    assert runtime.session.loaded_sources == [config.script_path.read_text(encoding="utf-8")]
    assert runtime.session.closed


def test_single_file_existing_target_skips_remote(tmp_path: Path, config, runtime) -> None:
    """Complete with no remote call when track.ogg already exists."""
    source = tmp_path / "track.mgg"
    source.write_bytes(b"encrypted")
    (tmp_path / "track.ogg").write_bytes(b"OggS")

    report = convert_single_file(
        source_path=source, config=config, runtime=runtime, on_message=_quiet
    )

    assert report.skipped and report.ok
    assert runtime.session.script.calls == []


def test_single_file_unsupported_extension_fails_before_attach(
    tmp_path: Path, config, runtime
) -> None:
    """Fail strictly on clip.mp3 without touching the runtime."""
    source = tmp_path / "clip.mp3"
    source.write_bytes(b"id3")

    with pytest.raises(UnsupportedExtension):
        convert_single_file(source_path=source, config=config, runtime=runtime)
    assert runtime.attached == []


def test_single_file_missing_path(tmp_path: Path, config, runtime) -> None:
    """Report a missing input path."""
    with pytest.raises(FileNotFound, match="does not exist"):
        convert_single_file(
            source_path=tmp_path / "nope.mflac", config=config, runtime=runtime
        )


def test_single_file_directory_path(tmp_path: Path, config, runtime) -> None:
    """Report a directory passed as input."""
    folder = tmp_path / "album.mflac"
    folder.mkdir()
    with pytest.raises(NotAFile, match="not a file"):
        convert_single_file(source_path=folder, config=config, runtime=runtime)


def test_target_not_running(tmp_path: Path, config, make_runtime) -> None:
    """Fail with TargetNotFound when no process matches."""
    source = tmp_path / "song.mflac"
    source.write_bytes(b"encrypted")
    runtime = make_runtime(processes=[TargetProcess(1, "explorer.exe")])

    with pytest.raises(TargetNotFound, match="Start the target application"):
        convert_single_file(source_path=source, config=config, runtime=runtime)
    assert runtime.attached == []


def test_missing_script_file_is_load_failure(tmp_path: Path, config, runtime) -> None:
    """Surface an unreadable collaborator script as ScriptLoadFailure."""
    source = tmp_path / "song.mflac"
    source.write_bytes(b"encrypted")
    broken = config.model_copy(update={"script_path": tmp_path / "missing.js"})

    with pytest.raises(ScriptLoadFailure, match="missing.js"):
        convert_single_file(source_path=source, config=broken, runtime=runtime)


def test_remote_error_closes_session_and_leaves_no_target(
    tmp_path: Path, config, make_runtime, make_script
) -> None:
    """Propagate RemoteCallFailure, detach, and produce no output."""
    source = tmp_path / "song.mflac"
    source.write_bytes(b"encrypted")
    runtime = make_runtime(script=make_script(error="Error: access violation"))

    with pytest.raises(RemoteCallFailure, match="access violation"):
        convert_single_file(
            source_path=source, config=config, runtime=runtime, on_message=_quiet
        )
    assert runtime.session.closed
    assert not (tmp_path / "song.flac").exists()


def _populate(source_dir: Path, *names: str) -> None:
    source_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (source_dir / name).write_bytes(b"data")


def test_batch_skips_ineligible_and_creates_output(config, runtime) -> None:
    """Convert eligible files, ignore the rest, and create the output directory."""
    _populate(config.source_dir, "b.mgg", "a.mflac", "clip.mp3", "notes.txt")
    (config.source_dir / "nested.mflac").mkdir()

    report = convert_directory(config=config, runtime=runtime, on_message=_quiet)

    assert [o.source_path.name for o in report.outcomes] == ["a.mflac", "b.mgg"]
    assert sorted(p.name for p in config.output_dir.iterdir()) == ["a.flac", "b.ogg"]
    assert len(runtime.attached) == 1
    assert runtime.session.closed


def test_batch_without_eligible_files_does_not_attach(config, runtime) -> None:
    """Return an empty successful report without attaching."""
    _populate(config.source_dir, "clip.mp3")

    report = convert_directory(config=config, runtime=runtime)

    assert report.outcomes == () and report.ok
    assert runtime.attached == []
    assert config.output_dir.is_dir()


def test_batch_missing_source_dir(config, runtime) -> None:
    """Fail with DirectoryResolutionFailure when the source directory is absent."""
    with pytest.raises(DirectoryResolutionFailure, match="does not exist"):
        convert_directory(config=config, runtime=runtime)


def test_batch_aborts_on_first_remote_failure(config, make_runtime, make_script) -> None:
    """Abort the whole batch on a remote failure by default."""
    _populate(config.source_dir, "a.mflac", "b.mgg")
    runtime = make_runtime(script=make_script(error="boom"))

    with pytest.raises(RemoteCallFailure):
        convert_directory(config=config, runtime=runtime, on_message=_quiet)
    assert len(runtime.session.script.calls) == 1
    assert runtime.session.closed


def test_batch_keep_going_records_failures(config, make_runtime, make_script) -> None:
    """Record per-file failures and continue when keep_going is set."""
    _populate(config.source_dir, "a.mflac", "b.mgg")
    runtime = make_runtime(script=make_script(error="boom"))

    report = convert_directory(
        config=config,
        options=build_run_options(keep_going=True),
        runtime=runtime,
        on_message=_quiet,
    )

    assert [o.status for o in report.outcomes] == ["failed", "failed"]
    assert not report.ok
    assert len(runtime.session.script.calls) == 2


def test_single_file_relative_path_sends_absolute_remote_args(
    tmp_path: Path, config, runtime, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Pass absolute source and temp paths to decrypt for a relative PATH."""
    (tmp_path / "song.mflac").write_bytes(b"encrypted")
    monkeypatch.chdir(tmp_path)

    convert_single_file(
        source_path=Path("song.mflac"), config=config, runtime=runtime, on_message=_quiet
    )

    [(export, args)] = runtime.session.script.calls
    assert export == "decrypt"
    assert args[0] == str(tmp_path.resolve() / "song.mflac")
    assert all(Path(str(arg)).is_absolute() for arg in args)
    assert (tmp_path / "song.flac").exists()


def test_batch_default_relative_dirs_send_absolute_remote_args(
    tmp_path: Path, config, runtime, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Resolve the relative input/output defaults before calling decrypt."""
    monkeypatch.chdir(tmp_path)
    relative = config.model_copy(
        update={"source_dir": Path("input"), "output_dir": Path("output")}
    )
    _populate(tmp_path / "input", "a.mflac")

    report = convert_directory(config=relative, runtime=runtime, on_message=_quiet)

    [(_, args)] = runtime.session.script.calls
    base = tmp_path.resolve()
    assert args[0] == str(base / "input" / "a.mflac")
    assert Path(str(args[1])).parent == base / "output"
    assert [o.status for o in report.outcomes] == ["converted"]
    assert (tmp_path / "output" / "a.flac").exists()
