"""Services for the notifications app."""

from notifications.services.health_service import HealthService, health_service

# Notification services are imported from their modules directly; importing
# them here would load models during app registry population.

__all__ = ["HealthService", "health_service"]
