"""
Celery tasks for the kanban planner
"""
import logging
from celery import shared_task

from .services import KanbanService, list_owners

logger = logging.getLogger(__name__)


@shared_task(
    acks_late=True,  # Acknowledge after completion (allows retry on crash)
    soft_time_limit=300,
    time_limit=360,
)
def normalize_all_orders():
    """
    Nightly repair of every ordered list (sidebars, columns, tasks, today lists).

    Returns:
        dict: users processed and rows rewritten per collection
    """
    logger.info("Starting nightly order normalization")

    owners = list(list_owners())

    totals = {'projects': 0, 'columns': 0, 'tasks': 0, 'today': 0}
    failed = []

    for user in owners:
        try:
            counts = KanbanService(user).normalize()
        except Exception as e:
            logger.error(f"Order normalization failed for user {user.pk}: {e}", exc_info=True)
            failed.append(user.pk)
            continue

        for name, count in counts.items():
            totals[name] += count

    logger.info(f"Order normalization finished: {totals}")
    return {
        'status': 'completed' if not failed else 'partial',
        'users_processed': len(owners) - len(failed),
        'failed_users': failed,
        'rows_updated': totals,
    }
