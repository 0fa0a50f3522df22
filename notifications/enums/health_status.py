"""Health status enumeration."""

from enum import Enum


class HealthStatus(str, Enum):
    """Dependency health values reported by the readiness probe."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    ERROR = "error"
