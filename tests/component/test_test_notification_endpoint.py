"""Component tests for the test-notification endpoint."""

from django.test import override_settings

import responses

from notifications.constants import ADMIN_SCOPE, USER_SCOPE
from notifications.models import Notification
from notifications.repositories import PreferenceRepository
from tests.base import BaseComponentTest
from tests.factories import make_push_token

URL = "/api/v1/notifications/test"
GATEWAY_URL = "https://push.test/--/api/v2/push/send"


class TestTestNotificationEndpoint(BaseComponentTest):
    def setUp(self):
        super().setUp()
        self.authenticate_as(self.owner_id, scopes=(USER_SCOPE, ADMIN_SCOPE))

    def test_requires_admin_scope(self):
        self.authenticate_as(self.owner_id, scopes=(USER_SCOPE,))

        response = self.post_json(URL)

        self.assertEqual(response.status_code, 403)
        self.assertFalse(Notification.objects.exists())

    @override_settings(NOTIFICATION_TEST_REQUIRES_ADMIN=False)
    def test_user_scope_is_enough_when_configured(self):
        self.authenticate_as(self.owner_id, scopes=(USER_SCOPE,))

        self.assertEqual(self.post_json(URL).status_code, 201)

    @responses.activate
    def test_creates_and_pushes_despite_preferences(self):
        responses.post(GATEWAY_URL, json={"data": {"status": "ok", "id": "t-1"}})
        make_push_token(self.owner_id)
        PreferenceRepository.update(self.owner_id, {"enabled": False})

        response = self.post_json(URL)

        self.assertEqual(response.status_code, 201)
        notification = response.json()["notification"]
        self.assertEqual(notification["type"], "system")
        self.assertFalse(notification["isRead"])
        self.assertTrue(
            Notification.objects.filter(
                notification_id=notification["notificationId"]
            ).exists()
        )
        self.assertEqual(len(responses.calls), 1)
