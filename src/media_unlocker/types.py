"""Shared type aliases for runtime messages and extension tables."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal

type OutcomeStatus = Literal["converted", "skipped", "failed"]

type ExtensionPair = tuple[str, str]
type ExtensionTable = tuple[ExtensionPair, ...]

type RemoteMessage = Mapping[str, Any]
type MessageHandler = Callable[[RemoteMessage, bytes | None], None]
