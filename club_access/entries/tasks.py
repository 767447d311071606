import logging

from celery import shared_task

from club_access.common.exceptions import EntryNotFound
from club_access.entries.services import get_entry
from club_access.realtime.events.pool_entries import publish_pool_entry_created

logger = logging.getLogger(__name__)


@shared_task(name="entries.broadcast_pool_entry", ignore_result=True)
def broadcast_pool_entry(entry_id: int) -> bool:
    """Send a committed pool entry to the live dashboards."""
    try:
        entry = get_entry(entry_id)
    except EntryNotFound:
        logger.warning("Pool entry %s vanished before it could be broadcast", entry_id)
        return False
    return publish_pool_entry_created(entry)
