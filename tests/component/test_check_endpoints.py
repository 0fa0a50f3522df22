"""Component tests for the pantry and grocery recheck endpoints."""

from unittest.mock import patch

from tests.base import BaseComponentTest


class TestCheckEndpoints(BaseComponentTest):
    @patch("notifications.views.enqueue_pantry_check", return_value="job-pantry")
    def test_check_pantry_queues_job(self, mock_enqueue):
        response = self.post_json("/api/v1/notifications/check-pantry")

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.json(), {"success": True, "jobId": "job-pantry"})
        mock_enqueue.assert_called_once_with(self.owner_id)

    @patch("notifications.views.enqueue_grocery_check", return_value="job-grocery")
    def test_check_grocery_queues_job(self, mock_enqueue):
        response = self.post_json("/api/v1/notifications/check-grocery")

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.json()["jobId"], "job-grocery")
        mock_enqueue.assert_called_once_with(self.owner_id)

    @patch("notifications.views.enqueue_pantry_check")
    def test_unauthenticated_queues_nothing(self, mock_enqueue):
        self.unauthenticate()

        response = self.post_json("/api/v1/notifications/check-pantry")

        self.assertEqual(response.status_code, 401)
        mock_enqueue.assert_not_called()
