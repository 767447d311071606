"""Gate workflows exercised end to end through the HTTP API."""

import datetime as dt
import io
from unittest import mock

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError
from PIL import Image
from rest_framework import status

from club_access.members.models import Member

IN_SEASON = dt.datetime(2025, 1, 15, 15, 0, tzinfo=dt.UTC)


def _jpeg():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color="red").save(buf, format="JPEG")
    return SimpleUploadedFile("face.jpg", buf.getvalue(), content_type="image/jpeg")


@pytest.fixture(autouse=True)
def _setup(freeze_clock, broadcasts):
    freeze_clock(IN_SEASON)


@pytest.mark.django_db
def test_member_check_in_then_duplicate(auth_client, photo_store):
    res = auth_client.post(
        "/api/v1/members/",
        {"first_name": "Ana", "last_name": "Paz", "dni": "12345678"},
    )
    member_id = res.json()["id"]
    entry = {"category": "CLUB_MEMBER", "member_id": member_id, "pool_access": False}

    first = auth_client.post("/api/v1/entries/", entry, format="json")
    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["entry_date"] == "2025-01-15"

    second = auth_client.post("/api/v1/entries/", entry, format="json")
    assert second.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
def test_enrolled_member_classifies_as_pool_member(auth_client, photo_store):
    member_id = auth_client.post(
        "/api/v1/members/",
        {"first_name": "Ana", "last_name": "Paz", "dni": "12345678"},
    ).json()["id"]
    season_id = auth_client.post(
        "/api/v1/seasons/",
        {"name": "Summer", "start_date": "2024-12-01", "end_date": "2025-03-31"},
    ).json()["id"]
    auth_client.post(
        f"/api/v1/seasons/{season_id}/members/", {"member_id": member_id}
    )

    res = auth_client.get("/api/v1/members/classify/12345678/")
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["category"] == "POOL_MEMBER"
    assert res.json()["member"]["id"] == member_id


@pytest.mark.django_db
def test_daily_statistics_after_check_ins(auth_client, api_client, make_member):
    pool = [make_member(), make_member()]
    club = make_member()
    for m in pool:
        api_client.post(
            "/api/v1/entries/",
            {"category": "POOL_MEMBER", "member_id": m.pk, "pool_access": True},
            format="json",
        )
    api_client.post(
        "/api/v1/entries/",
        {"category": "CLUB_MEMBER", "member_id": club.pk, "pool_access": False},
        format="json",
    )
    for dni in ("30111222", "30111333"):
        api_client.post(
            "/api/v1/entries/",
            {"category": "NON_MEMBER", "dni": dni, "pool_access": False},
            format="json",
        )

    body = auth_client.get("/api/v1/statistics/daily/", {"date": "2025-01-15"}).json()
    assert body["total_entries"] == 5  # noqa: PLR2004
    assert body["pool_entries"] == 2  # noqa: PLR2004
    assert body["club_entries"] == 3  # noqa: PLR2004
    assert body["member_entries"] == 3  # noqa: PLR2004
    assert body["non_member_entries"] == 2  # noqa: PLR2004


@pytest.mark.django_db
def test_failed_member_update_discards_new_photo(
    auth_client, photo_store, make_member, django_capture_on_commit_callbacks
):
    old_url = "https://res.cloudinary.com/test/image/upload/v1/members/old.jpg"
    member = make_member(first_name="Ana", photo_url=old_url)

    with (
        django_capture_on_commit_callbacks(execute=True),
        mock.patch.object(Member, "save", side_effect=IntegrityError("forced")),
    ):
        res = auth_client.patch(
            f"/api/v1/members/{member.pk}/",
            {"first_name": "Eva", "photo": _jpeg()},
            format="multipart",
        )

    assert res.status_code == status.HTTP_409_CONFLICT
    assert photo_store.deleted == photo_store.uploaded
    assert len(photo_store.uploaded) == 1
    member.refresh_from_db()
    assert member.first_name == "Ana"
    assert member.photo_url == old_url
