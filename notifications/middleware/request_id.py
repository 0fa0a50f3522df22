"""Request ID middleware for log correlation."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from notifications.constants import REQUEST_ID_HEADER
from notifications.logging.context import clear_request_id, set_request_id


class RequestIDMiddleware:
    """Attach a request ID to every request, log line and response.

    An incoming ``X-Request-ID`` header is honoured so mobile clients and
    upstream gateways can correlate their own logs; otherwise a UUID4 is
    generated. The ID lives in thread-local storage for the duration of the
    request and is always cleared afterwards.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
