"""Registry entries and emitter options."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class Listener(BaseModel):
    """A registered handler plus its one-shot flag.

    The flag lives here rather than on the handler, so one callable can be
    one-shot for one event type and persistent for another.
    """

    handler: Callable[..., Any]
    once: bool = False


class EmitterOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Share a single Event across a whole fire pass. Once a one-shot handler
    # runs, every later handler in that pass sees once=True and is removed too.
    shared_event: bool = False
    # Guard every public operation with an internal re-entrant lock.
    thread_safe: bool = False
