"""Unit tests for the NotificationClient facade."""

import json
from unittest.mock import MagicMock, call

import pytest
import requests
import responses

from notifications.client import (
    NetworkError,
    NotificationClient,
    NotificationListeners,
    NotificationState,
    RECEIVED,
    TAPPED,
)

BASE_URL = "http://api.test/api/v1"
FIRST_ID = "11111111-1111-4111-8111-111111111111"
SECOND_ID = "22222222-2222-4222-8222-222222222222"


def _item(notification_id, is_read=False):
    return {
        "notificationId": notification_id,
        "type": "pantry",
        "title": "Items Expiring Soon",
        "message": "Milk expires in 2 days",
        "priority": "high",
        "payload": {"type": "pantry", "itemName": "Milk", "daysLeft": 2},
        "isRead": is_read,
        "readAt": None,
        "createdAt": "2026-03-10T12:00:00Z",
    }


def _list_body(*items, unread_count=None):
    return {
        "success": True,
        "notifications": list(items),
        "unreadCount": (
            unread_count
            if unread_count is not None
            else sum(1 for i in items if not i["isRead"])
        ),
        "page": 1,
        "limit": 20,
        "total": len(items),
        "hasMore": False,
    }


PREFERENCES = {
    "enabled": True,
    "pantryExpiry": True,
    "groceryDeadline": True,
    "chefRecipes": True,
    "chefCourses": True,
    "communityActivity": True,
    "healthReminders": True,
    "quietHoursStart": None,
    "quietHoursEnd": None,
    "timezone": "UTC",
}


@pytest.fixture
def badge():
    return MagicMock()


@pytest.fixture
def client(badge):
    return NotificationClient(BASE_URL, token_provider=lambda: "token-1", badge_setter=badge)


@pytest.fixture
def loaded(client):
    """Client whose state holds two unread notifications."""
    with responses.RequestsMock() as rsps:
        rsps.get(
            f"{BASE_URL}/notifications", json=_list_body(_item(FIRST_ID), _item(SECOND_ID))
        )
        client.fetch()
    return client


class TestFetch:
    @responses.activate
    def test_fetch_populates_state_and_badge(self, client, badge):
        responses.get(f"{BASE_URL}/notifications", json=_list_body(_item(FIRST_ID)))

        state = client.fetch()

        assert [str(n.notification_id) for n in state.notifications] == [FIRST_ID]
        assert state.unread_count == 1
        assert state.stale is False
        badge.assert_called_with(1)
        assert responses.calls[0].request.headers["Authorization"] == "Bearer token-1"

    def test_failed_fetch_keeps_list_and_marks_stale(self, loaded):
        with responses.RequestsMock() as rsps:
            rsps.get(
                f"{BASE_URL}/notifications",
                body=requests.ConnectionError("offline"),
            )
            with pytest.raises(NetworkError):
                loaded.fetch()

        assert loaded.state.stale is True
        assert len(loaded.state.notifications) == 2

    @responses.activate
    def test_unsuccessful_body_is_a_network_error(self, client):
        responses.get(
            f"{BASE_URL}/notifications",
            json={"success": False, "message": "Storage down"},
            status=503,
        )

        with pytest.raises(NetworkError) as exc_info:
            client.fetch()

        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "Storage down"


class TestMarkAsRead:
    def test_success_keeps_optimistic_change(self, loaded, badge):
        with responses.RequestsMock() as rsps:
            rsps.put(
                f"{BASE_URL}/notifications/mark-read",
                json={"success": True, "unreadCount": 1},
            )
            unread = loaded.mark_as_read([FIRST_ID])
            sent = json.loads(rsps.calls[0].request.body)

        assert unread == 1
        assert sent == {"notificationIds": [FIRST_ID]}
        first = loaded.state.notifications[0]
        assert first.is_read is True
        assert first.read_at is not None
        assert loaded.state.unread_count == 1
        badge.assert_called_with(1)

    def test_failure_restores_state_and_badge(self, loaded, badge):
        with responses.RequestsMock() as rsps:
            rsps.put(
                f"{BASE_URL}/notifications/mark-read",
                json={"success": False, "message": "Storage down"},
                status=503,
            )
            with pytest.raises(NetworkError):
                loaded.mark_as_read(mark_all=True)

        assert all(not n.is_read for n in loaded.state.notifications)
        assert loaded.state.unread_count == 2
        assert badge.call_args_list[-2:] == [call(0), call(2)]

    def test_nothing_to_mark_sends_nothing(self, loaded):
        with responses.RequestsMock():
            assert loaded.mark_as_read([]) == 2


class TestDeleteNotifications:
    def test_delete_removes_locally(self, loaded):
        with responses.RequestsMock() as rsps:
            rsps.delete(
                f"{BASE_URL}/notifications", json={"success": True, "unreadCount": 1}
            )
            loaded.delete_notifications([SECOND_ID])

        assert [str(n.notification_id) for n in loaded.state.notifications] == [FIRST_ID]
        assert loaded.state.unread_count == 1

    def test_failed_delete_restores_list(self, loaded):
        with responses.RequestsMock() as rsps:
            rsps.delete(
                f"{BASE_URL}/notifications",
                json={"success": False, "message": "Forbidden"},
                status=403,
            )
            with pytest.raises(NetworkError):
                loaded.delete_notifications(delete_all=True)

        assert len(loaded.state.notifications) == 2
        assert loaded.state.unread_count == 2


class TestPreferences:
    @responses.activate
    def test_update_sends_only_changed_fields(self, client):
        responses.get(
            f"{BASE_URL}/notifications/preferences",
            json={"success": True, "preferences": PREFERENCES},
        )
        responses.put(
            f"{BASE_URL}/notifications/preferences",
            json={"success": True, "preferences": {**PREFERENCES, "chefRecipes": False}},
        )

        updated = client.update_preferences(chef_recipes=False, enabled=True)

        assert json.loads(responses.calls[1].request.body) == {"chefRecipes": False}
        assert updated.chef_recipes is False
        assert client.state.preferences.chef_recipes is False

    @responses.activate
    def test_no_change_sends_nothing(self, client):
        responses.get(
            f"{BASE_URL}/notifications/preferences",
            json={"success": True, "preferences": PREFERENCES},
        )

        client.update_preferences(enabled=True)

        assert len(responses.calls) == 1

    def test_unknown_field_is_rejected(self, client):
        with pytest.raises(ValueError):
            client.update_preferences(push_everything=True)


class TestServerActions:
    @responses.activate
    def test_check_pantry_returns_job_id(self, client):
        responses.post(
            f"{BASE_URL}/notifications/check-pantry",
            json={"success": True, "jobId": "job-1"},
            status=202,
        )

        assert client.check_pantry_expiry() == "job-1"

    @responses.activate
    def test_send_test_refreshes_list(self, client):
        responses.post(
            f"{BASE_URL}/notifications/test",
            json={"success": True, "notification": _item(FIRST_ID)},
            status=201,
        )
        responses.get(f"{BASE_URL}/notifications", json=_list_body(_item(FIRST_ID)))

        notification = client.send_test_notification()

        assert str(notification.notification_id) == FIRST_ID
        assert client.state.unread_count == 1

    @responses.activate
    def test_register_and_unregister_token(self, client):
        responses.post(
            f"{BASE_URL}/notifications/register-token", json={"success": True}
        )
        responses.delete(
            f"{BASE_URL}/notifications/register-token", json={"success": True}
        )

        client.register_push_token("ExponentPushToken[x]")
        client.unregister_push_token("ExponentPushToken[x]")

        assert [json.loads(c.request.body) for c in responses.calls] == [
            {"token": "ExponentPushToken[x]"},
            {"token": "ExponentPushToken[x]"},
        ]


class TestMounted:
    def test_tap_marks_read_and_refreshes(self, loaded):
        listeners = NotificationListeners()
        with responses.RequestsMock() as rsps:
            rsps.put(
                f"{BASE_URL}/notifications/mark-read",
                json={"success": True, "unreadCount": 1},
            )
            rsps.get(
                f"{BASE_URL}/notifications",
                json=_list_body(_item(FIRST_ID, is_read=True), _item(SECOND_ID)),
            )
            with loaded.mounted(listeners):
                listeners.emit(TAPPED, {"notificationId": FIRST_ID, "type": "pantry"})

        assert loaded.state.unread_count == 1
        assert loaded.state.notifications[0].is_read is True

    def test_listeners_removed_on_exit(self, client):
        listeners = NotificationListeners()

        with pytest.raises(RuntimeError), client.mounted(listeners):
            assert listeners.count(RECEIVED) == 1
            assert listeners.count(TAPPED) == 1
            raise RuntimeError("screen crashed")

        assert listeners.count(RECEIVED) == 0
        assert listeners.count(TAPPED) == 0

    def test_received_push_failure_is_not_raised(self, loaded):
        listeners = NotificationListeners()
        with responses.RequestsMock() as rsps:
            rsps.get(f"{BASE_URL}/notifications", status=500, json={})
            with loaded.mounted(listeners):
                listeners.emit(RECEIVED, {"type": "pantry"})

        assert loaded.state.stale is True


def test_state_can_be_shared():
    state = NotificationState()
    client = NotificationClient(BASE_URL, token_provider=lambda: None, state=state)

    assert client.state is state
