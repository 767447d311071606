"""Civil-day helpers for the club timezone.

Every "what day is it" question in the project goes through this module so
that the write path (stamping a check-in with its day) and the read paths
(duplicate guard, date ranges, today's pool list, daily statistics) agree.

``day_window`` keeps the historical construction used by the check-in
clients: the civil date is computed in ``CLUB_TIME_ZONE`` and its calendar
fields are then reinterpreted as UTC midnight / end of day. The boundaries
therefore carry the day number but not the zone offset.

Ledger queries bucket by the stamped ``entry_date`` rather than by these
instants.
"""

from __future__ import annotations

import datetime as dt
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone

END_OF_DAY = dt.time(23, 59, 59, 999000)


def club_zone() -> ZoneInfo:
    return ZoneInfo(settings.CLUB_TIME_ZONE)


def now() -> dt.datetime:
    """Current aware instant (UTC)."""
    return timezone.now()


def civil_today() -> dt.date:
    """Today's calendar date in the club timezone."""
    return timezone.localtime(now(), club_zone()).date()


def parse_civil_date(value: str) -> dt.date:
    """Parse ``YYYY-MM-DD``; raises ``ValueError`` on anything else."""
    return dt.date.fromisoformat(str(value).strip())


def day_window(date_str: str | None = None) -> tuple[dt.datetime, dt.datetime]:
    """Return the (start, end) UTC instants for a civil date.

    Without an argument, today's civil date is used. The same date always
    yields the same pair of instants.
    """
    day = parse_civil_date(date_str) if date_str else civil_today()
    start = dt.datetime.combine(day, dt.time.min, tzinfo=dt.UTC)
    end = dt.datetime.combine(day, END_OF_DAY, tzinfo=dt.UTC)
    return start, end
