"""Root URL configuration.

All service endpoints live under the ``/api/v1/`` prefix.
"""

from django.urls import include, path

urlpatterns = [
    path("api/v1/", include("notifications.urls")),
]
