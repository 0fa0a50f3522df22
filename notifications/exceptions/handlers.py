"""Global exception handler for the notification service API."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from notifications.constants import REQUEST_ID_HEADER
from notifications.exceptions.downstream_exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)
from notifications.exceptions.notification_exceptions import (
    AuthorizationError,
    PersistenceError,
    ValidationError,
)
from notifications.logging.context import get_request_id

logger = logging.getLogger(__name__)

_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_429_TOO_MANY_REQUESTS: "too_many_requests",
    status.HTTP_502_BAD_GATEWAY: "bad_gateway",
    status.HTTP_503_SERVICE_UNAVAILABLE: "service_unavailable",
}


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Maps DRF, Django and notification-domain exceptions onto the standard
    error body ``{success, error, message, requestId, timestamp}`` and logs
    the failure with enough request detail for troubleshooting.

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)

    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = _create_error_response(
            status_code=response.status_code,
            message=str(detail) if detail else str(exc),
            request_id=request_id,
        )
    elif isinstance(exc, ValidationError):
        body = _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=str(exc),
            request_id=request_id,
        )
        body["errors"] = exc.errors
        response = Response(body, status=status.HTTP_400_BAD_REQUEST)
    elif isinstance(exc, AuthorizationError):
        response = Response(
            _create_error_response(
                status_code=status.HTTP_403_FORBIDDEN,
                message=str(exc),
                request_id=request_id,
            ),
            status=status.HTTP_403_FORBIDDEN,
        )
    elif isinstance(exc, PersistenceError):
        response = Response(
            _create_error_response(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                message="Notification storage is temporarily unavailable.",
                request_id=request_id,
            ),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    elif isinstance(exc, DownstreamServiceError):
        status_code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if isinstance(exc, DownstreamServiceUnavailableError)
            else status.HTTP_502_BAD_GATEWAY
        )
        response = Response(
            _create_error_response(
                status_code=status_code,
                message=str(exc),
                request_id=request_id,
            ),
            status=status_code,
        )
    else:
        response = Response(
            _create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="An internal server error occurred.",
                request_id=request_id,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if request_id:
        response[REQUEST_ID_HEADER] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    """Create a standardized error response body.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "success": False,
        "error": _ERROR_CODES.get(status_code, "internal_error"),
        "message": message,
        "requestId": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(exc: Exception, request: Any, response: Response) -> None:
    """Log exception details; client errors at WARNING, server errors at ERROR.

    Stack traces are only included in DEBUG mode.
    """
    status_code = response.status_code
    log_level = logging.WARNING if status_code < 500 else logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    logger.log(log_level, log_message)


def error_response(
    status_code: int,
    message: str,
    errors: list[dict[str, Any]] | None = None,
) -> Response:
    """Build an error Response in the standard body format.

    Used by views that reject a request before reaching the service layer.
    """
    body = _create_error_response(
        status_code=status_code, message=message, request_id=get_request_id()
    )
    if errors is not None:
        body["errors"] = errors
    return Response(body, status=status_code)
