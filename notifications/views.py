"""API views for the notifications app."""

import structlog
from django.conf import settings
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.auth import OAuth2Authentication
from notifications.constants import ADMIN_SCOPE, USER_SCOPE
from notifications.exceptions.handlers import error_response
from notifications.jobs.expiry_jobs import enqueue_grocery_check, enqueue_pantry_check
from notifications.pagination import NotificationPagination
from notifications.schemas.notification import (
    MarkReadRequest,
    NotificationDeleteRequest,
    NotificationItem,
    RegisterTokenRequest,
    UnreadCountResponse,
)
from notifications.schemas.preferences import PreferencesUpdateRequest
from notifications.schemas.publish_event_request import PublishEventRequest
from notifications.services import health_service
from notifications.services.notification_service import notification_service

logger = structlog.get_logger(__name__)


def _forbidden(request, required_scope: str) -> Response:
    logger.warning(
        "User lacks required scope",
        user_id=request.user.user_id,
        scopes=request.user.scopes,
        required_scope=required_scope,
    )
    return error_response(
        status.HTTP_403_FORBIDDEN,
        f"Requires {required_scope} scope",
    )


def _invalid_body(e: ValidationError, what: str) -> Response:
    errors = e.errors(include_url=False, include_context=False)
    logger.warning(f"Invalid request body for {what}", validation_errors=errors)
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request parameters", errors=errors
    )


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes")


class LivenessCheckView(APIView):
    """Liveness probe. Does not touch any dependency; no authentication."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe.

    Returns 200 with ``status: degraded`` when the database or cache is
    down, so the instance stays in rotation while it reconnects.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        readiness = health_service.get_readiness_status()
        return Response(
            readiness.model_dump(by_alias=True, mode="json"),
            status=status.HTTP_200_OK,
        )


class NotificationListView(APIView):
    """The authenticated user's notifications.

    GET: paginated list, newest first
    DELETE: delete by id or delete all
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """List notifications.

        Query parameters:
        - page: 1-based page number (default: 1)
        - limit: items per page (default: 20, max: 100)
        - isRead: optional true/false filter
        - type: optional notification type filter

        Returns:
            200 with ``{success, notifications, unreadCount, page, limit,
            total, hasMore}``
        """
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        page, limit = NotificationPagination().get_page_params(request)
        result = notification_service.list_notifications(
            request.user.user_id,
            page=page,
            limit=limit,
            is_read=_parse_bool(request.query_params.get("isRead")),
            type=request.query_params.get("type") or None,
        )
        return Response(
            result.model_dump(by_alias=True, mode="json"), status=status.HTTP_200_OK
        )

    def delete(self, request):
        """Delete notifications.

        Body: ``{notificationIds: [...]}`` or ``{deleteAll: true}``.

        Returns:
            200 with ``{success, unreadCount}``
            403 if any id belongs to another user (nothing is deleted)
        """
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        try:
            delete_request = NotificationDeleteRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "notification delete")

        unread_count = notification_service.delete(
            request.user.user_id,
            notification_ids=delete_request.notification_ids,
            delete_all=delete_request.delete_all,
        )
        return Response(
            UnreadCountResponse(unread_count=unread_count).model_dump(by_alias=True),
            status=status.HTTP_200_OK,
        )


class MarkReadView(APIView):
    """PUT: mark notifications as read, by id or all at once."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def put(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        try:
            mark_read_request = MarkReadRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "mark read")

        unread_count = notification_service.mark_read(
            request.user.user_id,
            notification_ids=mark_read_request.notification_ids,
            mark_all=mark_read_request.mark_all,
        )
        return Response(
            UnreadCountResponse(unread_count=unread_count).model_dump(by_alias=True),
            status=status.HTTP_200_OK,
        )


class PreferencesView(APIView):
    """The authenticated user's notification preferences.

    GET: current preferences (created with defaults on first access)
    PUT: partial update; only fields present in the body change
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        preferences = notification_service.get_preferences(request.user.user_id)
        return Response(
            {"success": True, "preferences": preferences.model_dump(by_alias=True)},
            status=status.HTTP_200_OK,
        )

    def put(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        try:
            update_request = PreferencesUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "preferences update")

        preferences = notification_service.update_preferences(
            request.user.user_id, update_request.changes()
        )
        return Response(
            {"success": True, "preferences": preferences.model_dump(by_alias=True)},
            status=status.HTTP_200_OK,
        )


class RegisterTokenView(APIView):
    """POST registers a device push token; DELETE unregisters it."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        try:
            token_request = RegisterTokenRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "push token registration")

        notification_service.register_token(request.user.user_id, token_request.token)
        return Response({"success": True}, status=status.HTTP_200_OK)

    def delete(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        try:
            token_request = RegisterTokenRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "push token removal")

        notification_service.unregister_token(request.user.user_id, token_request.token)
        return Response({"success": True}, status=status.HTTP_200_OK)


class TestNotificationView(APIView):
    """POST: create and push a test notification to the caller's devices.

    Bypasses preferences and quiet hours. Requires the admin scope unless
    NOTIFICATION_TEST_REQUIRES_ADMIN is disabled.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        required_scope = (
            ADMIN_SCOPE if settings.NOTIFICATION_TEST_REQUIRES_ADMIN else USER_SCOPE
        )
        if not request.user.has_scope(required_scope):
            return _forbidden(request, required_scope)

        logger.info("Test notification requested", user_id=request.user.user_id)
        notification = notification_service.send_test(request.user.user_id)
        return Response(
            {
                "success": True,
                "notification": notification.model_dump(by_alias=True, mode="json"),
            },
            status=status.HTTP_201_CREATED,
        )


class CheckPantryView(APIView):
    """POST: queue a recheck of the caller's pantry for expiring items."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        job_id = enqueue_pantry_check(request.user.user_id)
        return Response(
            {"success": True, "jobId": job_id}, status=status.HTTP_202_ACCEPTED
        )


class CheckGroceryView(APIView):
    """POST: queue a recheck of the caller's grocery deadlines."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if not request.user.has_scope(USER_SCOPE):
            return _forbidden(request, USER_SCOPE)

        job_id = enqueue_grocery_check(request.user.user_id)
        return Response(
            {"success": True, "jobId": job_id}, status=status.HTTP_202_ACCEPTED
        )


class PublishEventView(APIView):
    """POST: deliver a domain event to a user. Service-to-service, admin scope.

    Returns:
        201 with the created notification
        200 with ``notification: null`` when suppressed or a duplicate
        400 if the event is malformed
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if not request.user.has_scope(ADMIN_SCOPE):
            return _forbidden(request, ADMIN_SCOPE)

        try:
            publish_request = PublishEventRequest.model_validate(request.data)
        except ValidationError as e:
            return _invalid_body(e, "event publish")

        notification = notification_service.publish(
            publish_request.owner_id, publish_request.kind, publish_request.context
        )
        if notification is None:
            return Response(
                {"success": True, "notification": None}, status=status.HTTP_200_OK
            )
        item = NotificationItem.model_validate(notification)
        return Response(
            {"success": True, "notification": item.model_dump(by_alias=True, mode="json")},
            status=status.HTTP_201_CREATED,
        )
