"""Tests for the emitter's debug logging."""

from __future__ import annotations

import logging

import pytest

from evemit import EventEmitter


@pytest.fixture()
def emitter() -> EventEmitter:
    return EventEmitter()


def _handler(evt) -> None:
    pass


def test_rejections_are_logged_at_debug(emitter: EventEmitter, caplog):
    caplog.set_level(logging.DEBUG, logger="evemit")

    emitter.on(5, _handler)
    emitter.on("t", None)
    emitter.on("t", _handler)
    emitter.on("t", _handler)

    messages = [r.getMessage() for r in caplog.records]
    assert any("not a string" in m for m in messages)
    assert any("not callable" in m for m in messages)
    assert any("duplicate" in m for m in messages)
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_fire_is_logged(emitter: EventEmitter, caplog):
    caplog.set_level(logging.DEBUG, logger="evemit")
    emitter.on("t", _handler)

    emitter.fire("t")

    assert any("Firing 't' to 1 listener(s)" in r.getMessage() for r in caplog.records)


def test_handler_errors_are_not_logged(emitter: EventEmitter, caplog):
    caplog.set_level(logging.DEBUG, logger="evemit")

    def boom(evt):
        raise RuntimeError("boom")

    emitter.on("t", boom)
    with pytest.raises(RuntimeError):
        emitter.fire("t")

    assert all(r.levelno < logging.WARNING for r in caplog.records)
    assert not any("boom" in r.getMessage() for r in caplog.records)
