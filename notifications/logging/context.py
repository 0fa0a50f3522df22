"""Thread-local request context used to correlate log lines."""

import threading

_request_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Store the request ID for the current thread."""
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    """Return the current thread's request ID, or None outside a request."""
    return getattr(_request_context, "request_id", None)


def clear_request_id() -> None:
    """Forget the current thread's request ID.

    Called by the middleware once the response is produced so IDs never
    leak into the next request served by the same worker thread.
    """
    if hasattr(_request_context, "request_id"):
        delattr(_request_context, "request_id")
