"""In-memory registry of listeners, keyed by event type."""

from __future__ import annotations

from evemit.domain.models import Listener


class ListenerRegistry:
    """Dict-backed store for Listener lists, keyed by event type."""

    def __init__(self) -> None:
        self._store: dict[str, list[Listener]] = {}

    def get(self, event_type: str) -> list[Listener] | None:
        return self._store.get(event_type)

    def get_or_create(self, event_type: str) -> list[Listener]:
        return self._store.setdefault(event_type, [])

    def snapshot(self, event_type: str) -> list[Listener]:
        """Return a copy of the listeners for *event_type*, safe to iterate while mutating."""
        return list(self._store.get(event_type, ()))

    def reset(self, event_type: str) -> None:
        """Empty one type's listeners; the key itself stays present."""
        self._store[event_type] = []

    def clear(self) -> None:
        self._store = {}

    def event_types(self) -> list[str]:
        return list(self._store)
