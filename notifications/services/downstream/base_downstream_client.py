"""Base client for calls to downstream HTTP services."""

from typing import Any

import requests
import structlog

from notifications.exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Shared request handling for downstream service clients.

    Subclasses provide the base URL and, optionally, a service token sent as
    a bearer credential.
    """

    def __init__(
        self,
        service_name: str,
        base_url: str,
        access_token: str | None = None,
        timeout: float = 10,
    ):
        """Initialize base downstream client.

        Args:
            service_name: Name of the downstream service (for logging/errors)
            base_url: Base URL for the service, without trailing slash
            access_token: Service credential sent as ``Authorization: Bearer``
            timeout: Request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _make_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Make an HTTP request and translate failures.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path relative to ``base_url``
            params: Query parameters
            json_data: JSON body
            headers: Extra headers merged over the defaults

        Returns:
            The response (2xx or 404)

        Raises:
            DownstreamServiceError: For client errors (4xx except 404)
            DownstreamServiceUnavailableError: For 5xx, timeouts and
                connection failures
        """
        url = f"{self.base_url}{path}"
        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        logger.info(
            "Making downstream service request",
            service=self.service_name,
            method=method,
            url=url,
        )

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=request_headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(
                "Downstream service request timed out",
                service=self.service_name,
                url=url,
                timeout=self.timeout,
            )
            raise DownstreamServiceUnavailableError(
                service_name=self.service_name,
                message=f"{self.service_name} request timed out",
            ) from e
        except requests.ConnectionError as e:
            logger.error(
                "Failed to connect to downstream service",
                service=self.service_name,
                url=url,
                error=str(e),
            )
            raise DownstreamServiceUnavailableError(service_name=self.service_name) from e

        logger.info(
            "Received downstream service response",
            service=self.service_name,
            url=url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "Downstream service returned server error",
                service=self.service_name,
                status_code=response.status_code,
            )
            raise DownstreamServiceUnavailableError(
                service_name=self.service_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400 and response.status_code != 404:
            logger.error(
                "Downstream service returned client error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text[:500],
            )
            raise DownstreamServiceError(
                message=f"{self.service_name} returned {response.status_code}",
                service_name=self.service_name,
                status_code=response.status_code,
            )

        return response
