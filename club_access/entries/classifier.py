"""Decide which kind of entry a person makes at the gate.

A DNI that belongs to no member is a visitor. A member is a pool member
when enrolled in the season covering today, otherwise a plain club member
(also when no season is running).
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from club_access.common import clock
from club_access.entries.models import EntryCategory
from club_access.members.models import Member
from club_access.members.services import get_member_by_dni
from club_access.seasons.services import current_season
from club_access.seasons.services import is_enrolled


@dataclass(frozen=True)
class Classification:
    member: Member | None
    category: EntryCategory


def classify(dni: str, *, today: dt.date | None = None) -> Classification:
    member = get_member_by_dni(dni)
    if member is None:
        return Classification(member=None, category=EntryCategory.NON_MEMBER)

    season = current_season(today or clock.civil_today())
    if season is not None and is_enrolled(season.pk, member.pk):
        return Classification(member=member, category=EntryCategory.POOL_MEMBER)
    return Classification(member=member, category=EntryCategory.CLUB_MEMBER)
