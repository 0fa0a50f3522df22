"""Exceptions raised when calling the meal-planning backend."""


class DownstreamServiceError(Exception):
    """A downstream service rejected or failed a request."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize downstream service error.

        Args:
            message: Error message
            service_name: Name of the downstream service
            status_code: HTTP status code, when a response was received
        """
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message)


class DownstreamServiceUnavailableError(DownstreamServiceError):
    """The service answered 5xx, timed out, or could not be reached."""

    def __init__(
        self,
        service_name: str,
        status_code: int | None = None,
        message: str | None = None,
    ):
        if message is None:
            message = (
                f"{service_name} service is unavailable (status: {status_code})"
                if status_code is not None
                else f"{service_name} service is unreachable"
            )
        super().__init__(
            message=message, service_name=service_name, status_code=status_code
        )
