"""Unit tests for PreferenceRepository."""

from datetime import UTC, datetime

from notifications.models import NotificationPreferences
from notifications.repositories import PreferenceRepository
from tests.base import BaseUnitTest


def _at(hour, minute=0):
    return datetime(2026, 1, 15, hour, minute, tzinfo=UTC)


class TestPreferenceStore(BaseUnitTest):
    """Creation and partial updates."""

    def test_get_or_create_uses_defaults(self):
        preferences = PreferenceRepository.get_or_create(self.owner_id)

        self.assertTrue(preferences.enabled)
        for field in NotificationPreferences.CATEGORY_FIELDS:
            self.assertTrue(getattr(preferences, field), field)
        self.assertIsNone(preferences.quiet_hours_start)
        self.assertEqual(preferences.timezone, "UTC")

    def test_get_or_create_is_stable(self):
        first = PreferenceRepository.get_or_create(self.owner_id)
        second = PreferenceRepository.get_or_create(self.owner_id)

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(NotificationPreferences.objects.count(), 1)

    def test_update_changes_only_given_fields(self):
        PreferenceRepository.update(self.owner_id, {"pantry_expiry": False})
        updated = PreferenceRepository.update(
            self.owner_id, {"quiet_hours_start": "22:00", "quiet_hours_end": "07:00"}
        )

        self.assertFalse(updated.pantry_expiry)
        self.assertTrue(updated.grocery_deadline)
        self.assertEqual(updated.quiet_hours_start, "22:00")
        self.assertEqual(updated.quiet_hours_end, "07:00")


class TestCategoryEnabled(BaseUnitTest):
    def test_master_switch_off_disables_all_kinds(self):
        preferences = PreferenceRepository.update(self.owner_id, {"enabled": False})

        self.assertFalse(PreferenceRepository.category_enabled(preferences, "chef_recipe"))
        self.assertFalse(PreferenceRepository.category_enabled(preferences, "system_alert"))

    def test_toggle_maps_to_kinds(self):
        preferences = PreferenceRepository.update(
            self.owner_id, {"pantry_expiry": False}
        )

        self.assertFalse(
            PreferenceRepository.category_enabled(preferences, "pantry_expiry")
        )
        self.assertFalse(
            PreferenceRepository.category_enabled(preferences, "pantry_low_stock")
        )
        self.assertTrue(
            PreferenceRepository.category_enabled(preferences, "grocery_deadline")
        )

    def test_kinds_without_toggle_follow_master_switch(self):
        preferences = PreferenceRepository.get_or_create(self.owner_id)

        self.assertTrue(
            PreferenceRepository.category_enabled(preferences, "payment_card_expiry")
        )


class TestQuietHours(BaseUnitTest):
    """Quiet window evaluation including midnight wraparound."""

    def _preferences(self, start, end, tz="UTC"):
        return NotificationPreferences(
            owner_id=self.owner_id,
            quiet_hours_start=start,
            quiet_hours_end=end,
            timezone=tz,
        )

    def test_wrapping_window(self):
        preferences = self._preferences("22:00", "07:00")

        self.assertTrue(PreferenceRepository.in_quiet_hours(preferences, _at(23)))
        self.assertTrue(PreferenceRepository.in_quiet_hours(preferences, _at(2)))
        self.assertTrue(PreferenceRepository.in_quiet_hours(preferences, _at(6, 59)))
        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(7)))
        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(10)))
        self.assertTrue(PreferenceRepository.in_quiet_hours(preferences, _at(22)))

    def test_same_day_window(self):
        preferences = self._preferences("13:00", "15:30")

        self.assertTrue(PreferenceRepository.in_quiet_hours(preferences, _at(14)))
        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(15, 30)))
        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(12, 59)))

    def test_equal_bounds_mean_no_window(self):
        preferences = self._preferences("08:00", "08:00")

        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(8)))

    def test_missing_bound_means_no_window(self):
        self.assertFalse(
            PreferenceRepository.in_quiet_hours(self._preferences("22:00", None), _at(23))
        )
        self.assertFalse(
            PreferenceRepository.in_quiet_hours(self._preferences(None, None), _at(23))
        )

    def test_window_is_evaluated_in_owner_timezone(self):
        preferences = self._preferences("22:00", "07:00", tz="America/New_York")

        # 03:30 UTC on 15 Jan is 22:30 in New York (UTC-5).
        self.assertTrue(
            PreferenceRepository.in_quiet_hours(preferences, _at(3, 30))
        )
        # 15:00 UTC is 10:00 in New York.
        self.assertFalse(PreferenceRepository.in_quiet_hours(preferences, _at(15)))
