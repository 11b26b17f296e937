"""Error taxonomy for process attachment and file conversion."""

from __future__ import annotations

from pathlib import Path


class UnlockerError(Exception):
    """Base error for all user-facing failures.

    Attributes
    ----------
    exit_code : int
        Process exit status used by the CLI when this error aborts a run.
    """

    exit_code: int = 1


class ConfigurationError(UnlockerError):
    """Raised when runtime configuration fails validation."""


class TargetNotFound(UnlockerError):
    """Raised when no running process matches the target name."""

    def __init__(self, name_substring: str) -> None:
        super().__init__(
            f"No running process matches '{name_substring}'. "
            "Start the target application first."
        )
        self.name_substring = name_substring


class AttachFailure(UnlockerError):
    """Raised when the instrumentation session cannot be established."""


class ScriptLoadFailure(UnlockerError):
    """Raised when the collaborator script fails to compile or activate."""


class RemoteCallFailure(UnlockerError):
    """Raised when a remote export is missing, throws, or the session is gone."""

    def __init__(self, export_name: str, detail: str) -> None:
        super().__init__(f"Remote call '{export_name}' failed: {detail}")
        self.export_name = export_name
        self.detail = detail


class UnsupportedExtension(UnlockerError):
    """Raised when a file has no mapped target extension."""

    def __init__(self, path: Path) -> None:
        suffix = path.suffix or "<none>"
        super().__init__(f"Unsupported extension {suffix!r}: {path}")
        self.path = path


class FileNotFound(UnlockerError):
    """Raised when the supplied input path does not exist."""

    exit_code = 2

    def __init__(self, path: Path) -> None:
        super().__init__(f"File does not exist: {path}")
        self.path = path


class NotAFile(UnlockerError):
    """Raised when the supplied input path is not a regular file."""

    exit_code = 2

    def __init__(self, path: Path) -> None:
        super().__init__(f"Path is not a file: {path}")
        self.path = path


class PublishFailure(UnlockerError):
    """Raised when the temporary output cannot be renamed into place."""

    def __init__(self, temp_path: Path, target_path: Path, reason: str) -> None:
        super().__init__(
            f"Cannot rename {temp_path} -> {target_path}: {reason}"
        )
        self.temp_path = temp_path
        self.target_path = target_path


class DirectoryResolutionFailure(UnlockerError):
    """Raised when a source or destination directory cannot be determined."""
