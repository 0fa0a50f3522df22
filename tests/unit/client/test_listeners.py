"""Unit tests for NotificationListeners."""

from unittest.mock import MagicMock

from notifications.client import RECEIVED, TAPPED, NotificationListeners


def test_emit_reaches_only_matching_event():
    listeners = NotificationListeners()
    on_received = MagicMock()
    on_tapped = MagicMock()
    listeners.subscribe(RECEIVED, on_received)
    listeners.subscribe(TAPPED, on_tapped)

    listeners.emit(RECEIVED, {"type": "pantry"})

    on_received.assert_called_once_with({"type": "pantry"})
    on_tapped.assert_not_called()


def test_unsubscribe_is_idempotent():
    listeners = NotificationListeners()
    subscription = listeners.subscribe(RECEIVED, MagicMock())

    subscription.unsubscribe()
    subscription.unsubscribe()

    assert subscription.active is False
    assert listeners.count(RECEIVED) == 0


def test_failing_listener_does_not_block_others():
    listeners = NotificationListeners()
    healthy = MagicMock()
    listeners.subscribe(TAPPED, MagicMock(side_effect=RuntimeError("boom")))
    listeners.subscribe(TAPPED, healthy)

    listeners.emit(TAPPED, {"notificationId": "n-1"})

    healthy.assert_called_once()


def test_listener_may_unsubscribe_during_emit():
    listeners = NotificationListeners()
    calls = []

    def once(data):
        calls.append(data)
        subscription.unsubscribe()

    subscription = listeners.subscribe(RECEIVED, once)

    listeners.emit(RECEIVED, {"n": 1})
    listeners.emit(RECEIVED, {"n": 2})

    assert calls == [{"n": 1}]
