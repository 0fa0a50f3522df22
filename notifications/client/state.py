"""Client-side cache of a user's notification state."""

from dataclasses import dataclass, field

from notifications.schemas.notification import NotificationItem
from notifications.schemas.preferences import NotificationPreferencesSchema


@dataclass
class NotificationState:
    """What the client currently believes about the user's notifications.

    Owned by the caller and passed to NotificationClient explicitly. ``stale``
    is set when the last fetch failed and the list shown is the previous one.
    """

    notifications: list[NotificationItem] = field(default_factory=list)
    unread_count: int = 0
    preferences: NotificationPreferencesSchema | None = None
    stale: bool = False

    def snapshot(self) -> "NotificationState":
        """Return an independent copy for rollback."""
        return NotificationState(
            notifications=[item.model_copy() for item in self.notifications],
            unread_count=self.unread_count,
            preferences=self.preferences.model_copy() if self.preferences else None,
            stale=self.stale,
        )

    def restore(self, snapshot: "NotificationState") -> None:
        self.notifications = snapshot.notifications
        self.unread_count = snapshot.unread_count
        self.preferences = snapshot.preferences
        self.stale = snapshot.stale
