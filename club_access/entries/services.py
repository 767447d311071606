"""Entry ledger: append-only record of check-ins at the gate.

A person may check in once per civil day. The day an entry belongs to is
stamped at write time from the club clock (``entry_date``); both the
duplicate guard and the "today" listings read that same bucket. The
application-level check rejects the common case without touching the
insert path, and the conditional unique constraints on the table settle
concurrent submissions.
"""

from __future__ import annotations

import datetime as dt
import logging

from django.db import IntegrityError
from django.db import transaction
from django.db.models import Q

from club_access.common import clock
from club_access.common.exceptions import DuplicateEntryToday
from club_access.common.exceptions import EntryNotFound
from club_access.common.exceptions import InvalidEntryIdentity
from club_access.common.exceptions import MemberNotFound
from club_access.entries.models import MEMBER_CATEGORIES
from club_access.entries.models import EntryCategory
from club_access.entries.models import EntryRecord
from club_access.members.models import Member
from club_access.members.services import get_member
from club_access.members.services import normalize_dni

logger = logging.getLogger(__name__)

ENTRY_ORDERING = ("-created_at", "id")


def _entries():
    return EntryRecord.objects.select_related("member").order_by(*ENTRY_ORDERING)


def _checked_in_on(day: dt.date, member, dni: str | None) -> bool:
    same_identity = Q(member=member) if member is not None else Q(dni=dni)
    return EntryRecord.objects.filter(same_identity, entry_date=day).exists()


def validate_identity(
    category: str, member_id: int | None, dni: str | None
) -> tuple[int | None, str | None]:
    """Check that the identity fields match the category.

    Visitors are identified by ``dni`` alone, members by ``member_id`` alone.
    Returns the cleaned ``(member_id, dni)`` pair.
    """
    dni = normalize_dni(dni)
    if category == EntryCategory.NON_MEMBER:
        if not dni or member_id is not None:
            raise InvalidEntryIdentity
    elif category in MEMBER_CATEGORIES:
        if member_id is None or dni:
            raise InvalidEntryIdentity
    else:
        msg = f"Unknown entry category '{category}'."
        raise InvalidEntryIdentity(msg)
    return member_id, dni


def create_entry(  # noqa: PLR0913
    *,
    category: str,
    pool_access: bool,
    member_id: int | None = None,
    dni: str | None = None,
    payment_method: str | None = None,
    amount: int = 0,
) -> EntryRecord:
    member_id, dni = validate_identity(category, member_id, dni)
    member = get_member(member_id) if member_id is not None else None

    today = clock.civil_today()
    if _checked_in_on(today, member, dni):
        logger.info(
            "Rejected second check-in today (member=%s dni=%s)", member_id, dni
        )
        raise DuplicateEntryToday

    try:
        with transaction.atomic():
            record = EntryRecord.objects.create(
                member=member,
                dni=dni,
                category=category,
                pool_access=pool_access,
                payment_method=payment_method or None,
                amount=amount or 0,
                created_at=clock.now(),
                entry_date=today,
            )
    except IntegrityError as exc:
        if _checked_in_on(today, member, dni):
            logger.warning(
                "Concurrent check-in rejected by constraint (member=%s dni=%s)",
                member_id,
                dni,
            )
            raise DuplicateEntryToday from exc
        if member is not None and not Member.objects.filter(pk=member.pk).exists():
            raise MemberNotFound from exc
        raise

    logger.info(
        "Entry %s recorded: %s pool=%s", record.pk, record.category, pool_access
    )
    return record


def get_entry(entry_id: int) -> EntryRecord:
    try:
        return _entries().get(pk=entry_id)
    except EntryRecord.DoesNotExist as exc:
        raise EntryNotFound from exc


def entries_for_dni(dni: str):
    """Entries made under this DNI, as a visitor or as the member holding it."""
    dni = normalize_dni(dni)
    if not dni:
        return EntryRecord.objects.none()
    return _entries().filter(Q(dni=dni) | Q(member__dni=dni))


def entries_in_range(start: dt.date, end: dt.date):
    """Entries stamped with a civil day between ``start`` and ``end`` inclusive."""
    return _entries().filter(entry_date__range=(start, end))


def list_entries():
    return _entries()


def entries_on_day(day: dt.date | None = None, *, pool_only: bool = False):
    qs = _entries().filter(entry_date=day or clock.civil_today())
    if pool_only:
        qs = qs.filter(pool_access=True)
    return qs
