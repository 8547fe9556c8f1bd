"""
MESSAGING App - Celery Tasks

- send_bulk_messages: send a messaging-panel batch in the background
"""

import logging
from datetime import date

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=0)
def send_bulk_messages(
    self,
    recipients: list,
    message: str,
    message_type: str,
    from_number: str = None,
    sender_email: str = 'system',
    day: str = None
):
    """
    Send one personalized SMS per recipient (async).

    Args:
        recipients: [{'phone': ..., 'name': ..., 'schedule_id': ...}]
        message: Template text with {name}/{startTime}/... placeholders
        message_type: Template type, used for logs and schedule statuses
        day: ISO date scoping shifts of recipients without schedule_id
    """
    from messaging.services import MessagingService

    result = MessagingService.send_batch(
        recipients, message, message_type,
        from_number=from_number, sender_email=sender_email,
        day=date.fromisoformat(day) if day else None,
    )
    summary = result['summary']
    if summary['failed']:
        logger.warning(f"[TASK] Bulk SMS: {summary['failed']}/{summary['total']} failed")
    return summary
