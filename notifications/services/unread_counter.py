"""Unread count bookkeeping and badge synchronization.

The unread count is always derived from the database. The cached copy and
every badge sink are mirrors that must be refreshed after each mutation.
"""

from collections.abc import Callable

from django.core.cache import cache

import structlog

from notifications.repositories import NotificationRepository

logger = structlog.get_logger(__name__)

BadgeSink = Callable[[str, int], None]

CACHE_KEY_TEMPLATE = "notifications:unread:{owner_id}"


def cache_key(owner_id: str) -> str:
    return CACHE_KEY_TEMPLATE.format(owner_id=owner_id)


class UnreadCounter:
    """Recomputes unread counts and pushes them to cache and badge sinks."""

    def __init__(self) -> None:
        self._sinks: list[BadgeSink] = []

    def add_sink(self, sink: BadgeSink) -> None:
        """Register a callable invoked as ``sink(owner_id, count)`` on every change."""
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove_sink(self, sink: BadgeSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def recompute(self, owner_id: str) -> int:
        """Count unread notifications, refresh the cache and mirror the badge.

        Cache and sink failures are logged and ignored; the returned count is
        always the database count.

        Raises:
            PersistenceError: If the count query fails
        """
        count = NotificationRepository.count_unread(owner_id)

        try:
            cache.set(cache_key(owner_id), count, timeout=None)
        except Exception as e:
            logger.warning("unread_cache_write_failed", owner_id=owner_id, error=str(e))

        for sink in list(self._sinks):
            try:
                sink(owner_id, count)
            except Exception as e:
                logger.warning(
                    "badge_sink_failed",
                    owner_id=owner_id,
                    sink=getattr(sink, "__name__", repr(sink)),
                    error=str(e),
                )

        logger.debug("unread_count_recomputed", owner_id=owner_id, unread_count=count)
        return count

    def cached(self, owner_id: str) -> int:
        """Return the cached count, recomputing on a miss."""
        try:
            value = cache.get(cache_key(owner_id))
        except Exception as e:
            logger.warning("unread_cache_read_failed", owner_id=owner_id, error=str(e))
            value = None
        if value is None:
            return self.recompute(owner_id)
        return int(value)


unread_counter = UnreadCounter()
