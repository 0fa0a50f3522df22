"""Unit tests for request schemas."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from notifications.schemas.notification import MarkReadRequest, NotificationDeleteRequest
from notifications.schemas.preferences import PreferencesUpdateRequest


class TestMarkReadRequest:
    def test_ids_or_mark_all_required(self):
        with pytest.raises(ValidationError):
            MarkReadRequest.model_validate({})

    def test_camel_case_body(self):
        notification_id = uuid4()

        request = MarkReadRequest.model_validate(
            {"notificationIds": [str(notification_id)]}
        )

        assert request.notification_ids == [notification_id]
        assert request.mark_all is False

    def test_too_many_ids(self):
        with pytest.raises(ValidationError):
            MarkReadRequest.model_validate(
                {"notificationIds": [str(uuid4()) for _ in range(101)]}
            )


class TestNotificationDeleteRequest:
    def test_delete_all(self):
        assert NotificationDeleteRequest.model_validate({"deleteAll": True}).delete_all

    def test_empty_body_is_rejected(self):
        with pytest.raises(ValidationError):
            NotificationDeleteRequest.model_validate({"notificationIds": []})


class TestPreferencesUpdateRequest:
    def test_changes_contains_only_sent_fields(self):
        request = PreferencesUpdateRequest.model_validate(
            {"chefRecipes": False, "quietHoursEnd": None, "enabled": None}
        )

        assert request.changes() == {"chef_recipes": False, "quiet_hours_end": None}

    @pytest.mark.parametrize("value", ["7:00", "24:00", "12:60", "noon"])
    def test_invalid_quiet_hours(self, value):
        with pytest.raises(ValidationError):
            PreferencesUpdateRequest.model_validate({"quietHoursStart": value})

    def test_timezone_must_exist(self):
        with pytest.raises(ValidationError):
            PreferencesUpdateRequest.model_validate({"timezone": "Europe/Atlantis"})

        assert (
            PreferencesUpdateRequest.model_validate({"timezone": "Europe/Berlin"}).timezone
            == "Europe/Berlin"
        )
