"""Background jobs for on-demand pantry and grocery rechecks."""

import django_rq
import structlog

from notifications.services.expiry_check_service import expiry_check_service

logger = structlog.get_logger(__name__)

QUEUE_NAME = "default"


def check_pantry_expiry_job(owner_id: str) -> int:
    """Run the pantry expiry check for ``owner_id``. Executed by RQ workers.

    Returns:
        Number of notifications created
    """
    logger.info("pantry_check_job_started", owner_id=owner_id)
    return expiry_check_service.check_pantry(owner_id)


def check_grocery_deadlines_job(owner_id: str) -> int:
    """Run the grocery deadline check for ``owner_id``. Executed by RQ workers."""
    logger.info("grocery_check_job_started", owner_id=owner_id)
    return expiry_check_service.check_grocery(owner_id)


def enqueue_pantry_check(owner_id: str) -> str:
    """Queue a pantry check and return the RQ job id."""
    job = django_rq.get_queue(QUEUE_NAME).enqueue(check_pantry_expiry_job, owner_id)
    logger.info("pantry_check_job_queued", owner_id=owner_id, job_id=job.id)
    return job.id


def enqueue_grocery_check(owner_id: str) -> str:
    """Queue a grocery deadline check and return the RQ job id."""
    job = django_rq.get_queue(QUEUE_NAME).enqueue(check_grocery_deadlines_job, owner_id)
    logger.info("grocery_check_job_queued", owner_id=owner_id, job_id=job.id)
    return job.id
