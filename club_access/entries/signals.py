import logging

from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from .models import EntryRecord
from .tasks import broadcast_pool_entry

logger = logging.getLogger(__name__)


def _queue_broadcast(entry_id: int) -> None:
    try:
        broadcast_pool_entry.delay(entry_id)
    except Exception:
        logger.exception("Could not queue broadcast for pool entry %s", entry_id)


@receiver(post_save, sender=EntryRecord)
def broadcast_new_pool_entry(sender, instance, created, **kwargs):
    if created and instance.pool_access:
        entry_id = instance.pk
        on_commit(lambda: _queue_broadcast(entry_id))
