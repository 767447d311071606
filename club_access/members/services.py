"""Member registry with photo-store coordination.

The photo store and the database cannot share a transaction, so every write
follows the same protocol: upload the new photo first, then perform the
relational write inside ``transaction.atomic``. If the write fails the photo
that was just uploaded is deleted again (best effort). A photo that is being
replaced or dropped is only removed from the store once the transaction has
committed.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError
from django.db import transaction
from django.db.models import Q

from club_access.common.exceptions import DuplicateDni
from club_access.common.exceptions import MemberNotFound
from club_access.integrations.photos.client import get_photo_store
from club_access.members.models import Member
from club_access.members.tasks import delete_photo

logger = logging.getLogger(__name__)

MEMBER_FIELDS = (
    "first_name",
    "last_name",
    "dni",
    "phone",
    "email",
    "address",
    "status",
    "gender",
    "birth_date",
    "joined_on",
)
SEARCH_FIELDS = ("first_name", "last_name", "dni", "email")


def normalize_dni(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def _ensure_dni_available(dni: str | None, exclude_id: int | None = None) -> None:
    if not dni:
        return
    qs = Member.objects.filter(dni=dni)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise DuplicateDni


def _discard_photo(url: str) -> None:
    """Compensation for a write that failed after its photo was uploaded."""
    try:
        get_photo_store().delete(url)
    except Exception:
        logger.exception("Could not remove orphaned photo %s", url)


def _schedule_photo_removal(url: str | None) -> None:
    if url:
        transaction.on_commit(lambda: delete_photo.delay(url))


def search_filter(search: str) -> Q:
    query = Q()
    for field in SEARCH_FIELDS:
        query |= Q(**{f"{field}__icontains": search})
    return query


def get_member(member_id: int) -> Member:
    try:
        return Member.objects.get(pk=member_id)
    except Member.DoesNotExist as exc:
        raise MemberNotFound from exc


def get_member_by_dni(dni: str) -> Member | None:
    dni = normalize_dni(dni)
    if not dni:
        return None
    return Member.objects.filter(dni=dni).first()


def list_members(search: str = ""):
    """Members ordered by last name, first name, optionally searched."""
    qs = Member.objects.order_by("last_name", "first_name", "id")
    search = (search or "").strip()
    if search:
        qs = qs.filter(search_filter(search))
    return qs


def create_member(data: dict[str, Any], photo=None) -> Member:
    fields = {k: v for k, v in data.items() if k in MEMBER_FIELDS}
    fields["dni"] = normalize_dni(fields.get("dni"))
    _ensure_dni_available(fields["dni"])

    photo_url = get_photo_store().upload(photo).url if photo is not None else None
    try:
        with transaction.atomic():
            member = Member(**fields, photo_url=photo_url)
            member.save()
    except IntegrityError as exc:
        if photo_url:
            _discard_photo(photo_url)
        logger.warning("Member insert rejected for dni=%s: %s", fields["dni"], exc)
        raise DuplicateDni from exc
    except Exception:
        if photo_url:
            _discard_photo(photo_url)
        raise

    logger.info("Member %s created (dni=%s)", member.pk, member.dni)
    return member


def update_member(
    member_id: int,
    data: dict[str, Any],
    photo=None,
    *,
    remove_photo: bool = False,
) -> Member:
    member = get_member(member_id)
    fields = {k: v for k, v in data.items() if k in MEMBER_FIELDS}
    if "dni" in fields:
        fields["dni"] = normalize_dni(fields["dni"])
        _ensure_dni_available(fields["dni"], exclude_id=member.pk)

    old_photo_url = member.photo_url
    new_photo_url = get_photo_store().upload(photo).url if photo is not None else None
    try:
        with transaction.atomic():
            member = Member.objects.select_for_update().get(pk=member.pk)
            for name, value in fields.items():
                setattr(member, name, value)
            if new_photo_url:
                member.photo_url = new_photo_url
            elif remove_photo:
                member.photo_url = None
            member.save()
            if member.photo_url != old_photo_url:
                _schedule_photo_removal(old_photo_url)
    except Exception:
        if new_photo_url:
            _discard_photo(new_photo_url)
        raise

    logger.info("Member %s updated", member.pk)
    return member


def delete_member(member_id: int) -> None:
    """Delete a member; their entries keep the row with ``member`` cleared."""
    with transaction.atomic():
        member = get_member(member_id)
        photo_url = member.photo_url
        member.delete()
        _schedule_photo_removal(photo_url)
    logger.info("Member %s deleted", member_id)
