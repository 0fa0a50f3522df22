"""URL configuration for the notifications app."""

from django.urls import path

from notifications import views

urlpatterns = [
    path("health/live", views.LivenessCheckView.as_view(), name="liveness-check"),
    path("health/ready", views.ReadinessCheckView.as_view(), name="readiness-check"),
    path(
        "notifications",
        views.NotificationListView.as_view(),
        name="notification-list",
    ),
    path(
        "notifications/mark-read",
        views.MarkReadView.as_view(),
        name="notification-mark-read",
    ),
    path(
        "notifications/preferences",
        views.PreferencesView.as_view(),
        name="notification-preferences",
    ),
    path(
        "notifications/register-token",
        views.RegisterTokenView.as_view(),
        name="notification-register-token",
    ),
    path(
        "notifications/test",
        views.TestNotificationView.as_view(),
        name="notification-test",
    ),
    path(
        "notifications/check-pantry",
        views.CheckPantryView.as_view(),
        name="notification-check-pantry",
    ),
    path(
        "notifications/check-grocery",
        views.CheckGroceryView.as_view(),
        name="notification-check-grocery",
    ),
    path(
        "notifications/events",
        views.PublishEventView.as_view(),
        name="notification-publish-event",
    ),
]
