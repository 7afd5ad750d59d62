"""Minimal in-process publish/subscribe emitter."""

from evemit.domain.bus import EventEmitter
from evemit.domain.events import Event, EventHandler
from evemit.domain.models import EmitterOptions

__all__ = ["EmitterOptions", "Event", "EventEmitter", "EventHandler"]
