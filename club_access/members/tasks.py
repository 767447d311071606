import logging

from celery import shared_task

from club_access.integrations.photos.client import get_photo_store

logger = logging.getLogger(__name__)


@shared_task(name="members.delete_photo")
def delete_photo(url: str) -> bool:
    """Remove a member photo that is no longer referenced.

    Returns whether the store acknowledged the deletion. Failures are logged
    and left for manual cleanup.
    """
    try:
        result = get_photo_store().delete(url)
    except Exception:
        logger.exception("Could not delete member photo %s", url)
        return False
    return (result or {}).get("result") == "ok"
