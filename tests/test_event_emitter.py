"""Tests for the in-process event emitter."""

import logging

import pytest

from keyauth.enums.EventType import EventType
from keyauth.framework.EventEmitter import EventEmitter


class TestEventEmitter:

    def test_delivers_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.subscribe("login", lambda data: calls.append(("first", data)))
        emitter.subscribe(EventType.LOG_IN, lambda data: calls.append(("second", data)))

        assert emitter.emit(EventType.LOG_IN, {'success': True}) is True

        assert calls == [("first", {'success': True}), ("second", {'success': True})]

    def test_emit_without_subscribers(self):
        emitter = EventEmitter()
        assert emitter.emit("error", {}) is False

    def test_subscribe_once(self):
        emitter = EventEmitter()
        calls = []
        emitter.subscribeOnce("init", calls.append)

        emitter.emit("init", {'n': 1})
        emitter.emit("init", {'n': 2})

        assert calls == [{'n': 1}]
        assert emitter.listenerCount("init") == 0

    def test_off_removes_subscription(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("check", calls.append)

        assert emitter.off("check", calls.append) is True
        assert emitter.off("check", calls.append) is False

        emitter.emit("check", {})
        assert calls == []

    def test_failing_subscriber_does_not_stop_delivery(self, caplog):
        emitter = EventEmitter()
        calls = []

        def broken(data):
            raise RuntimeError("handler bug")

        emitter.on("response", broken)
        emitter.on("response", calls.append)

        with caplog.at_level(logging.ERROR):
            emitter.emit("response", {'ok': 1})

        assert calls == [{'ok': 1}]
        assert "handler bug" in caplog.text

    def test_rejects_non_callable(self):
        emitter = EventEmitter()
        with pytest.raises(TypeError):
            emitter.on("init", "not callable")

    def test_subscriber_added_during_emit_waits_for_next_event(self):
        emitter = EventEmitter()
        calls = []

        def addAnother(data):
            emitter.on("log", lambda d: calls.append("late"))

        emitter.on("log", addAnother)
        emitter.emit("log", {})
        assert calls == []

        emitter.emit("log", {})
        assert calls == ["late"]
