"""Liveness and readiness probe responses."""

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel
from notifications.schemas.health.dependency_health import DependencyHealth


class LivenessResponse(BaseSchemaModel):
    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseSchemaModel):
    """Readiness is reported as degraded, not failed, when a dependency is down."""

    ready: bool = Field(..., description="Service is ready to serve requests")
    status: str = Field(..., description="'ready' or 'degraded'")
    degraded: bool = Field(..., description="Whether a dependency is unhealthy")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
