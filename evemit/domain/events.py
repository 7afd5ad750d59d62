"""The event record handed to every handler when a type is fired."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

from pydantic import BaseModel, Field

_last_timestamp = 0
_timestamp_lock = threading.Lock()


def now_ms() -> int:
    """Wall-clock milliseconds since the epoch, clamped so it never goes back."""
    global _last_timestamp
    now = time.time_ns() // 1_000_000
    with _timestamp_lock:
        if now < _last_timestamp:
            now = _last_timestamp
        _last_timestamp = now
    return now


class Event(BaseModel):
    """Created fresh by the emitter on each fire.

    ``type``, ``data`` and ``timestamp`` are fixed at creation; only ``once``
    may be flipped while the event is being dispatched.
    """

    type: str = Field(frozen=True)
    data: Any = Field(default=None, frozen=True)
    timestamp: int = Field(default_factory=now_ms, frozen=True)
    once: bool = False


EventHandler = Callable[[Event], None]
