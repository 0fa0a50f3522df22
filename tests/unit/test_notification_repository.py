"""Unit tests for NotificationRepository."""

from datetime import timedelta
from uuid import uuid4

from django.utils import timezone

from notifications.exceptions import AuthorizationError
from notifications.models import Notification
from notifications.repositories import NotificationRepository
from tests.base import BaseUnitTest
from tests.factories import fake, make_notification, make_notifications


class TestListByOwner(BaseUnitTest):
    def test_newest_first_with_id_tie_break(self):
        created_at = timezone.now()
        same_time = [
            make_notification(self.owner_id, created_at=created_at) for _ in range(3)
        ]
        older = make_notification(
            self.owner_id, created_at=created_at - timedelta(hours=1)
        )

        items, total = NotificationRepository.list_by_owner(
            self.owner_id, page=1, limit=10
        )

        expected_same_time = sorted(
            (n.notification_id for n in same_time), reverse=True
        )
        self.assertEqual(total, 4)
        self.assertEqual([n.notification_id for n in items[:3]], expected_same_time)
        self.assertEqual(items[3].notification_id, older.notification_id)

    def test_pages_do_not_overlap(self):
        make_notifications(self.owner_id, 5)

        first, total = NotificationRepository.list_by_owner(self.owner_id, page=1, limit=2)
        second, _ = NotificationRepository.list_by_owner(self.owner_id, page=2, limit=2)
        third, _ = NotificationRepository.list_by_owner(self.owner_id, page=3, limit=2)

        ids = [n.notification_id for n in first + second + third]
        self.assertEqual(total, 5)
        self.assertEqual(len(ids), 5)
        self.assertEqual(len(set(ids)), 5)

    def test_only_own_notifications_are_listed(self):
        make_notifications(self.owner_id, 2)
        make_notifications(fake.uuid4(), 3)

        items, total = NotificationRepository.list_by_owner(self.owner_id, page=1, limit=10)

        self.assertEqual(total, 2)
        self.assertTrue(all(n.owner_id == self.owner_id for n in items))

    def test_filters(self):
        make_notification(self.owner_id, type="chef", is_read=True)
        make_notification(self.owner_id, type="pantry")

        unread, unread_total = NotificationRepository.list_by_owner(
            self.owner_id, page=1, limit=10, is_read=False
        )
        chef, chef_total = NotificationRepository.list_by_owner(
            self.owner_id, page=1, limit=10, type="chef"
        )

        self.assertEqual(unread_total, 1)
        self.assertEqual(unread[0].type, "pantry")
        self.assertEqual(chef_total, 1)


class TestMarkRead(BaseUnitTest):
    def test_mark_read_sets_read_at(self):
        notification = make_notification(self.owner_id)

        changed = NotificationRepository.mark_read(
            self.owner_id, [notification.notification_id]
        )

        notification.refresh_from_db()
        self.assertEqual(changed, 1)
        self.assertTrue(notification.is_read)
        self.assertIsNotNone(notification.read_at)

    def test_mark_read_is_idempotent(self):
        notification = make_notification(self.owner_id)
        NotificationRepository.mark_read(self.owner_id, [notification.notification_id])
        notification.refresh_from_db()
        first_read_at = notification.read_at

        changed = NotificationRepository.mark_read(
            self.owner_id, [notification.notification_id]
        )

        notification.refresh_from_db()
        self.assertEqual(changed, 0)
        self.assertTrue(notification.is_read)
        self.assertEqual(notification.read_at, first_read_at)
        self.assertEqual(NotificationRepository.count_unread(self.owner_id), 0)

    def test_mark_all(self):
        make_notifications(self.owner_id, 4)
        other_owner = fake.uuid4()
        make_notifications(other_owner, 2)

        changed = NotificationRepository.mark_read(self.owner_id, mark_all=True)

        self.assertEqual(changed, 4)
        self.assertEqual(NotificationRepository.count_unread(self.owner_id), 0)
        self.assertEqual(NotificationRepository.count_unread(other_owner), 2)

    def test_unknown_ids_are_ignored(self):
        notification = make_notification(self.owner_id)

        changed = NotificationRepository.mark_read(
            self.owner_id, [notification.notification_id, uuid4()]
        )

        self.assertEqual(changed, 1)

    def test_foreign_id_raises_and_changes_nothing(self):
        own = make_notification(self.owner_id)
        foreign = make_notification(fake.uuid4())

        with self.assertRaises(AuthorizationError) as ctx:
            NotificationRepository.mark_read(
                self.owner_id, [own.notification_id, foreign.notification_id]
            )

        own.refresh_from_db()
        foreign.refresh_from_db()
        self.assertFalse(own.is_read)
        self.assertFalse(foreign.is_read)
        self.assertEqual(ctx.exception.foreign_ids, [str(foreign.notification_id)])


class TestDelete(BaseUnitTest):
    def test_delete_by_ids(self):
        keep, remove = make_notifications(self.owner_id, 2)

        deleted = NotificationRepository.delete(self.owner_id, [remove.notification_id])

        self.assertEqual(deleted, 1)
        self.assertTrue(
            Notification.objects.filter(notification_id=keep.notification_id).exists()
        )
        self.assertFalse(
            Notification.objects.filter(notification_id=remove.notification_id).exists()
        )

    def test_delete_twice_is_harmless(self):
        notification = make_notification(self.owner_id)

        NotificationRepository.delete(self.owner_id, [notification.notification_id])
        deleted = NotificationRepository.delete(
            self.owner_id, [notification.notification_id]
        )

        self.assertEqual(deleted, 0)

    def test_delete_all_leaves_other_owners(self):
        make_notifications(self.owner_id, 3)
        other_owner = fake.uuid4()
        make_notifications(other_owner, 1)

        NotificationRepository.delete(self.owner_id, delete_all=True)

        self.assertFalse(Notification.objects.filter(owner_id=self.owner_id).exists())
        self.assertEqual(Notification.objects.filter(owner_id=other_owner).count(), 1)

    def test_foreign_id_raises_and_deletes_nothing(self):
        own = make_notification(self.owner_id)
        foreign = make_notification(fake.uuid4())

        with self.assertRaises(AuthorizationError):
            NotificationRepository.delete(
                self.owner_id, [own.notification_id, foreign.notification_id]
            )

        self.assertEqual(Notification.objects.count(), 2)


class TestExistsRecent(BaseUnitTest):
    def test_respects_window(self):
        now = timezone.now()
        make_notification(
            self.owner_id, dedup_key="pantry_expiry:milk:high", created_at=now
        )

        self.assertTrue(
            NotificationRepository.exists_recent(
                self.owner_id, "pantry_expiry:milk:high", now - timedelta(hours=1)
            )
        )
        self.assertFalse(
            NotificationRepository.exists_recent(
                self.owner_id, "pantry_expiry:milk:high", now + timedelta(seconds=1)
            )
        )
        self.assertFalse(
            NotificationRepository.exists_recent(
                fake.uuid4(), "pantry_expiry:milk:high", now - timedelta(hours=1)
            )
        )
