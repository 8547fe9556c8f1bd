"""
SHIPMENTS App - Celery Tasks

- refresh_all_shipments: daily container tracking refresh (beat, 09:00)
"""

import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=1, default_retry_delay=300)
def refresh_all_shipments(self):
    """Refresh tracking for every in-transit container."""
    from shipments.services import refresh_all

    try:
        summary = refresh_all()
    except Exception as e:
        logger.error(f"[TASK] Shipment refresh failed: {e}")
        raise self.retry(exc=e)

    if summary['failed']:
        logger.warning(f"[TASK] {summary['failed']} container(s) failed to refresh")
    return summary
