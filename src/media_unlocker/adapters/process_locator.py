"""Target process discovery."""

from __future__ import annotations

import logging

from media_unlocker.application.ports import InstrumentationRuntime
from media_unlocker.application.results import TargetProcess
from media_unlocker.errors import TargetNotFound

logger = logging.getLogger(__name__)


class ProcessLocator:
    """Select the target process by case-insensitive name substring."""

    def __init__(self, runtime: InstrumentationRuntime) -> None:
        self._runtime = runtime

    def find_target(self, name_substring: str) -> TargetProcess:
        """Return the first process whose name contains ``name_substring``.

        Parameters
        ----------
        name_substring : str
            Case-insensitive fragment of the process display name.

        Returns
        -------
        TargetProcess
            First match in enumeration order. That order comes from the
            platform and is not guaranteed stable between runs.

        Raises
        ------
        TargetNotFound
            If no process matches.
        """
        needle = name_substring.strip().lower()
        if not needle:
            raise ValueError("name_substring cannot be empty")
        matches = [
            process
            for process in self._runtime.enumerate_processes()
            if needle in process.name.lower()
        ]
        if not matches:
            raise TargetNotFound(name_substring)
        if len(matches) > 1:
            logger.debug(
                "multiple processes match %r, using first: %s",
                name_substring,
                ", ".join(f"{p.name}({p.pid})" for p in matches),
            )
        return matches[0]
