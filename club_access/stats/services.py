from __future__ import annotations

import datetime as dt
from typing import Any

from django.db.models import Count
from django.db.models import Q

from club_access.common import clock
from club_access.entries.models import MEMBER_CATEGORIES
from club_access.entries.services import entries_on_day


def daily_statistics(day: dt.date | None = None) -> dict[str, Any]:
    """Entry counters for one civil day plus the entries themselves.

    Club entries are the ones without pool access; non-member entries are
    everything not made by a club or pool member.
    """
    day = day or clock.civil_today()
    entries = entries_on_day(day)
    counts = entries.aggregate(
        total=Count("id"),
        pool=Count("id", filter=Q(pool_access=True)),
        members=Count("id", filter=Q(category__in=MEMBER_CATEGORIES)),
    )
    return {
        "date": day,
        "total_entries": counts["total"],
        "pool_entries": counts["pool"],
        "club_entries": counts["total"] - counts["pool"],
        "member_entries": counts["members"],
        "non_member_entries": counts["total"] - counts["members"],
        "entries": list(entries),
    }
