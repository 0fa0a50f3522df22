"""Unit tests for the push delivery jobs."""

from datetime import timedelta
from unittest.mock import patch

from django.test import override_settings

from notifications.exceptions import (
    PermanentDeliveryError,
    PersistenceError,
    TransientDeliveryError,
)
from notifications.jobs.push_jobs import enqueue_push, send_push_job
from notifications.models import PushToken
from notifications.services.unread_counter import unread_counter
from tests.base import BaseUnitTest
from tests.factories import fake, make_notification, make_push_token


class TestSendPushJob(BaseUnitTest):
    def setUp(self):
        super().setUp()
        patcher = patch("notifications.jobs.push_jobs.push_gateway")
        self.gateway = patcher.start()
        self.addCleanup(patcher.stop)
        self.gateway.send.return_value = "ticket-1"

        self.notification = make_notification(self.owner_id, priority="urgent")
        self.notification_id = str(self.notification.notification_id)
        self.token = make_push_token(self.owner_id).token
        self.scheduler = self.mock_get_scheduler.return_value

    def test_success_returns_ticket_and_records_use(self):
        ticket = send_push_job(self.notification_id, self.token)

        self.assertEqual(ticket, "ticket-1")
        message = self.gateway.send.call_args.args[0]
        self.assertEqual(message["to"], self.token)
        self.assertEqual(message["priority"], "high")
        self.assertIsNotNone(PushToken.objects.get(token=self.token).last_used_at)
        self.scheduler.enqueue_in.assert_not_called()

    def test_badge_uses_current_unread_count(self):
        make_notification(self.owner_id)
        unread_counter.recompute(self.owner_id)

        send_push_job(self.notification_id, self.token)

        self.assertEqual(self.gateway.send.call_args.args[0]["badge"], 2)

    def test_deleted_notification_is_skipped(self):
        self.notification.delete()

        self.assertIsNone(send_push_job(self.notification_id, self.token))
        self.gateway.send.assert_not_called()

    def test_unregistered_token_is_skipped(self):
        PushToken.objects.filter(token=self.token).delete()

        self.assertIsNone(send_push_job(self.notification_id, self.token))
        self.gateway.send.assert_not_called()

    def test_token_moved_to_another_user_is_skipped(self):
        PushToken.objects.filter(token=self.token).update(owner_id=fake.uuid4())

        send_push_job(self.notification_id, self.token)

        self.gateway.send.assert_not_called()

    def test_permanent_failure_prunes_token(self):
        self.gateway.send.side_effect = PermanentDeliveryError(
            self.token, "DeviceNotRegistered"
        )

        self.assertIsNone(send_push_job(self.notification_id, self.token))
        self.assertFalse(PushToken.objects.filter(token=self.token).exists())
        self.scheduler.enqueue_in.assert_not_called()

    def test_transient_failure_schedules_retry(self):
        self.gateway.send.side_effect = TransientDeliveryError(
            self.token, "Push gateway returned 503"
        )

        send_push_job(self.notification_id, self.token)

        self.scheduler.enqueue_in.assert_called_once_with(
            timedelta(seconds=30), send_push_job, self.notification_id, self.token, 2
        )
        self.assertTrue(PushToken.objects.filter(token=self.token).exists())

    def test_retry_delay_doubles_per_attempt(self):
        self.gateway.send.side_effect = TransientDeliveryError(self.token, "timeout")

        send_push_job(self.notification_id, self.token, attempt=3)

        delay = self.scheduler.enqueue_in.call_args.args[0]
        self.assertEqual(delay, timedelta(seconds=120))
        self.assertEqual(self.scheduler.enqueue_in.call_args.args[-1], 4)

    @override_settings(PUSH_MAX_ATTEMPTS=2)
    def test_gives_up_after_max_attempts(self):
        self.gateway.send.side_effect = TransientDeliveryError(self.token, "timeout")

        self.assertIsNone(send_push_job(self.notification_id, self.token, attempt=2))
        self.scheduler.enqueue_in.assert_not_called()

    def test_prune_failure_is_logged_not_raised(self):
        self.gateway.send.side_effect = PermanentDeliveryError(
            self.token, "DeviceNotRegistered"
        )

        with patch(
            "notifications.jobs.push_jobs.PushTokenRepository.remove",
            side_effect=PersistenceError("db down"),
        ):
            self.assertIsNone(send_push_job(self.notification_id, self.token))

    def test_touch_failure_still_returns_ticket(self):
        with patch(
            "notifications.jobs.push_jobs.PushTokenRepository.touch",
            side_effect=PersistenceError("db down"),
        ):
            self.assertEqual(send_push_job(self.notification_id, self.token), "ticket-1")


class TestEnqueuePush(BaseUnitTest):
    def test_enqueues_one_job_on_default_queue(self):
        with patch("notifications.jobs.push_jobs.django_rq.get_queue") as mock_get_queue:
            mock_get_queue.return_value.enqueue.return_value.id = "job-42"

            job_id = enqueue_push("n-1", "ExponentPushToken[abc]")

        self.assertEqual(job_id, "job-42")
        mock_get_queue.assert_called_once_with("default")
        mock_get_queue.return_value.enqueue.assert_called_once_with(
            send_push_job, "n-1", "ExponentPushToken[abc]"
        )
