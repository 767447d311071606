from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from club_access.entries.api.serializers import EntryRecordSerializer
from club_access.entries.services import entries_on_day
from club_access.realtime.socketio import EVENT_POOL_LIST
from club_access.realtime.socketio import EVENT_POOL_NEW
from club_access.realtime.socketio import POOL_NAMESPACE
from club_access.realtime.socketio import emit_to_namespace

if TYPE_CHECKING:  # import for type checking only
    from club_access.entries.models import EntryRecord

logger = logging.getLogger(__name__)


def build_entry_payload(entry: EntryRecord) -> dict[str, Any]:
    return dict(EntryRecordSerializer(entry).data)


def build_pool_entries_payload() -> list[dict[str, Any]]:
    """Today's pool-access entries, newest first."""
    entries = entries_on_day(pool_only=True)
    return [dict(item) for item in EntryRecordSerializer(entries, many=True).data]


def publish_pool_entry_created(entry: EntryRecord) -> bool:
    """Push a committed pool entry and the refreshed list to all subscribers.

    Never raises: the entry is already stored and a dashboard hiccup must
    not surface to the caller. Returns whether both events went out.
    """

    try:
        emit_to_namespace(POOL_NAMESPACE, EVENT_POOL_NEW, build_entry_payload(entry))
        emit_to_namespace(POOL_NAMESPACE, EVENT_POOL_LIST, build_pool_entries_payload())
    except Exception:
        logger.exception("Realtime broadcast failed for entry %s", entry.pk)
        return False
    return True
