"""Health check service with short-lived result caching."""

import logging
import time

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from notifications.enums import HealthStatus
from notifications.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Liveness and readiness checks for the database and cache."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: How long a dependency check result is reused
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._results: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Check every dependency.

        The service reports ``degraded`` rather than not-ready when a
        dependency is down, so it stays in rotation while it recovers.
        """
        dependencies = {
            "database": self._cached("database", self._check_database),
            "cache": self._cached("cache", self._check_cache),
        }
        degraded = not all(dep.healthy for dep in dependencies.values())
        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def _cached(self, name: str, check) -> DependencyHealth:
        now = time.time()
        cached = self._results.get(name)
        if cached is not None and now - cached[0] < self.cache_ttl_seconds:
            return cached[1]
        result = check()
        self._results[name] = (now, result)
        return result

    def _check_database(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
        except OperationalError as e:
            logger.warning("Database health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def _check_cache(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            cache.set("__health_check__", "ok", timeout=1)
            healthy = cache.get("__health_check__") == "ok"
        except Exception as e:
            logger.warning("Cache health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Cache connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        return DependencyHealth(
            healthy=healthy,
            status=HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
            message=(
                "Cache connection successful"
                if healthy
                else "Cache health check failed: unexpected result"
            ),
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )


health_service = HealthService()
