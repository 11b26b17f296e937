"""Observer for out-of-band messages emitted by the collaborator script."""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

from media_unlocker.types import RemoteMessage

logger = logging.getLogger(__name__)


class MessageSink:
    """Write every script message to a stream and the log.

    Called from the runtime's message-delivery thread, concurrently with the
    blocking remote call on the control thread. Never raises.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self.message_count = 0
        self.payload_bytes = 0

    def __call__(self, message: RemoteMessage, data: bytes | None = None) -> None:
        self.on_message(message, data)

    def on_message(self, message: RemoteMessage, data: bytes | None = None) -> None:
        """Record one message and its optional binary payload."""
        try:
            with self._lock:
                self.message_count += 1
                if data:
                    self.payload_bytes += len(data)
                stream = self._stream or sys.stdout
                stream.write(f"- {message!r}\n")
                stream.flush()
            if message.get("type") == "error":
                logger.warning(
                    "script error: %s\n%s",
                    message.get("description"),
                    message.get("stack", ""),
                )
            else:
                logger.debug(
                    "script message: %r (%d payload bytes)",
                    message,
                    len(data) if data else 0,
                )
        except Exception:
            # Message delivery must not abort an in-flight conversion.
            logger.exception("failed to record script message")
