"""Source-to-target extension routing."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from media_unlocker.types import ExtensionPair, ExtensionTable

DEFAULT_EXTENSION_MAP: ExtensionTable = (
    ("mflac", "flac"),
    ("mgg", "ogg"),
)


class ExtensionRouter:
    """Map encrypted container extensions to their plain-format counterparts.

    Lookup is case-insensitive on the source side. Paths without an
    extension, or with an unmapped one, are ineligible and route to ``None``.
    """

    def __init__(self, mapping: Iterable[ExtensionPair] = DEFAULT_EXTENSION_MAP) -> None:
        self._table: dict[str, str] = {}
        for source, target in mapping:
            key = source.lower()
            if key in self._table:
                raise ValueError(f"Duplicate source extension: {source!r}")
            self._table[key] = target

    @classmethod
    def default(cls) -> ExtensionRouter:
        """Return a router over the built-in extension table."""
        return cls(DEFAULT_EXTENSION_MAP)

    @property
    def source_extensions(self) -> tuple[str, ...]:
        """Mapped source extensions in table order."""
        return tuple(self._table)

    def route(self, path: Path) -> str | None:
        """Return the target extension for ``path`` or ``None`` if ineligible."""
        suffix = path.suffix
        if not suffix:
            return None
        return self._table.get(suffix[1:].lower())

    def is_eligible(self, path: Path) -> bool:
        """Check whether ``path`` has a mapped extension."""
        return self.route(path) is not None
