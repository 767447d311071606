"""Season registry: season lifecycle and member enrollment.

Seasons are closed date intervals that must not overlap. Two ranges collide
when ``existing.start <= new.end`` and ``existing.end >= new.start``, so a
season ending on the 10th and another starting on the 10th conflict, while
one starting on the 11th does not.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from django.db import IntegrityError
from django.db import transaction

from club_access.common import clock
from club_access.common.exceptions import AlreadyEnrolled
from club_access.common.exceptions import EnrollmentNotFound
from club_access.common.exceptions import InvalidInput
from club_access.common.exceptions import OverlappingSeasons
from club_access.common.exceptions import SeasonNotFound
from club_access.members.models import Member
from club_access.members.services import get_member
from club_access.members.services import search_filter
from club_access.seasons.models import Enrollment
from club_access.seasons.models import Season

logger = logging.getLogger(__name__)

SEASON_FIELDS = ("name", "start_date", "end_date", "description")


def _check_range(start: dt.date, end: dt.date, exclude_id: int | None = None):
    if start > end:
        msg = "start_date must be on or before end_date."
        raise InvalidInput(msg)
    clashes = Season.objects.filter(start_date__lte=end, end_date__gte=start)
    if exclude_id is not None:
        clashes = clashes.exclude(pk=exclude_id)
    other = clashes.order_by("start_date", "id").first()
    if other is not None:
        msg = (
            f"The dates overlap with season '{other.name}' "
            f"({other.start_date} to {other.end_date})."
        )
        raise OverlappingSeasons(msg)


def get_season(season_id: int) -> Season:
    try:
        return Season.objects.get(pk=season_id)
    except Season.DoesNotExist as exc:
        raise SeasonNotFound from exc


def _lock_season(season_id: int) -> Season:
    try:
        return Season.objects.select_for_update().get(pk=season_id)
    except Season.DoesNotExist as exc:
        raise SeasonNotFound from exc


def list_seasons():
    return Season.objects.order_by("-start_date", "id")


def current_season(today: dt.date | None = None) -> Season | None:
    """The season covering ``today`` (club civil date), if any."""
    today = today or clock.civil_today()
    return (
        Season.objects.filter(start_date__lte=today, end_date__gte=today)
        .order_by("start_date", "id")
        .first()
    )


def create_season(data: dict[str, Any]) -> Season:
    fields = {k: v for k, v in data.items() if k in SEASON_FIELDS}
    with transaction.atomic():
        _check_range(fields["start_date"], fields["end_date"])
        season = Season.objects.create(**fields)
    logger.info(
        "Season %s created (%s..%s)", season.pk, season.start_date, season.end_date
    )
    return season


def update_season(season_id: int, data: dict[str, Any]) -> Season:
    """Apply a partial update; missing dates keep their stored values."""
    fields = {k: v for k, v in data.items() if k in SEASON_FIELDS}
    with transaction.atomic():
        season = _lock_season(season_id)
        start = fields.get("start_date", season.start_date)
        end = fields.get("end_date", season.end_date)
        _check_range(start, end, exclude_id=season.pk)
        for name, value in fields.items():
            setattr(season, name, value)
        season.save()
    logger.info("Season %s updated", season.pk)
    return season


def delete_season(season_id: int) -> None:
    with transaction.atomic():
        season = _lock_season(season_id)
        season.delete()
    logger.info("Season %s deleted", season_id)


def is_enrolled(season_id: int, member_id: int) -> bool:
    return Enrollment.objects.filter(season_id=season_id, member_id=member_id).exists()


def enroll(season_id: int, member_id: int) -> Enrollment:
    with transaction.atomic():
        season = _lock_season(season_id)
        member = get_member(member_id)
        if is_enrolled(season.pk, member.pk):
            raise AlreadyEnrolled
        try:
            with transaction.atomic():
                enrollment = Enrollment.objects.create(season=season, member=member)
        except IntegrityError as exc:
            raise AlreadyEnrolled from exc
    logger.info("Member %s enrolled in season %s", member.pk, season.pk)
    return enrollment


def unenroll(season_id: int, member_id: int) -> None:
    with transaction.atomic():
        _lock_season(season_id)
        deleted, _ = Enrollment.objects.filter(
            season_id=season_id, member_id=member_id
        ).delete()
        if not deleted:
            raise EnrollmentNotFound
    logger.info("Member %s removed from season %s", member_id, season_id)


def members_of(season_id: int):
    season = get_season(season_id)
    return Member.objects.filter(enrollments__season=season).order_by(
        "last_name", "first_name", "id"
    )


def available_members(season_id: int, search: str = ""):
    """Members not yet enrolled in the season, optionally filtered."""
    season = get_season(season_id)
    qs = Member.objects.exclude(enrollments__season=season)
    search = (search or "").strip()
    if search:
        qs = qs.filter(search_filter(search))
    return qs.order_by("last_name", "first_name", "id")
