"""HTTP transport for the notification client."""

from collections.abc import Callable
from typing import Any

import requests
import structlog

logger = structlog.get_logger(__name__)

TokenProvider = Callable[[], str | None]


class NetworkError(Exception):
    """The server could not be reached or did not report success."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.body = body or {}
        super().__init__(message)


class ApiClient:
    """Thin JSON client for the notification API.

    Every response must be a JSON object with ``success: true``; anything
    else, including transport failures, raises NetworkError.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        session: requests.Session | None = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded success body.

        Raises:
            NetworkError: On transport failure, non-2xx status, a non-JSON
                body, or ``success: false``
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_data,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("notification_api_unreachable", method=method, path=path)
            raise NetworkError(f"Could not reach notification service: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok or not isinstance(body, dict) or not body.get("success"):
            message = (
                body.get("message") if isinstance(body, dict) else None
            ) or f"Notification service returned {response.status_code}"
            logger.warning(
                "notification_api_error",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise NetworkError(
                message,
                status_code=response.status_code,
                body=body if isinstance(body, dict) else None,
            )
        return body

    def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json_data: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.request("POST", path, json_data=json_data or {})

    def put(self, path: str, json_data: dict[str, Any]) -> dict[str, Any]:
        return self.request("PUT", path, json_data=json_data)

    def delete(self, path: str, json_data: dict[str, Any]) -> dict[str, Any]:
        return self.request("DELETE", path, json_data=json_data)
