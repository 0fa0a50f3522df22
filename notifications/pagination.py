"""Pagination for notification list endpoints."""

from rest_framework.pagination import PageNumberPagination
from rest_framework.request import Request

from notifications.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from notifications.exceptions import ValidationError


class NotificationPagination(PageNumberPagination):
    """Offset pagination parameters for ``GET /notifications``.

    ``page`` is 1-based; ``limit`` defaults to 20 and is capped at 100.
    Slicing happens in the repository, so only the parameter parsing of
    PageNumberPagination is used here.
    """

    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = MAX_PAGE_SIZE

    def get_page_params(self, request: Request) -> tuple[int, int]:
        """Return ``(page, limit)`` parsed from the query string.

        Raises:
            ValidationError: If ``page`` is not a positive integer
        """
        raw_page = request.query_params.get(self.page_query_param, "1")
        try:
            page = int(raw_page)
        except ValueError:
            page = 0
        if page < 1:
            raise ValidationError(
                "page must be a positive integer",
                errors=[{"loc": ["page"], "msg": "must be >= 1", "input": raw_page}],
            )
        return page, self.get_page_size(request)
