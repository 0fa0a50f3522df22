"""Background jobs executed by django-rq workers."""
