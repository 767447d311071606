import datetime as dt

import pytest
from rest_framework import status

from club_access.seasons.models import Enrollment

URL = "/api/v1/seasons/"


def _create(client, name, start, end):
    return client.post(URL, {"name": name, "start_date": start, "end_date": end})


@pytest.mark.django_db
def test_season_crud(auth_client):
    res = _create(auth_client, "Summer", "2024-12-01", "2025-03-31")
    assert res.status_code == status.HTTP_201_CREATED
    season_id = res.json()["id"]

    res = auth_client.patch(f"{URL}{season_id}/", {"description": "Pool open"})
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["end_date"] == "2025-03-31"

    assert auth_client.get(URL).json()[0]["id"] == season_id
    res = auth_client.delete(f"{URL}{season_id}/")
    assert res.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.django_db
def test_overlapping_season_is_conflict(auth_client):
    _create(auth_client, "Summer", "2025-01-01", "2025-01-10")
    res = _create(auth_client, "Clash", "2025-01-10", "2025-01-12")
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.json()["error_code"] == "ERR_OVERLAPPING_SEASONS"


@pytest.mark.django_db
def test_backwards_dates_are_rejected(auth_client):
    res = _create(auth_client, "Backwards", "2025-02-01", "2025-01-01")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.django_db
def test_current_season_endpoint(auth_client, freeze_clock):
    freeze_clock(dt.datetime(2025, 1, 15, 15, 0, tzinfo=dt.UTC))
    assert auth_client.get(f"{URL}current/").status_code == status.HTTP_404_NOT_FOUND
    _create(auth_client, "Summer", "2024-12-01", "2025-03-31")
    res = auth_client.get(f"{URL}current/")
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["name"] == "Summer"


@pytest.mark.django_db
def test_enrollment_endpoints(auth_client, make_member):
    season_id = _create(auth_client, "Summer", "2024-12-01", "2025-03-31").json()["id"]
    member = make_member()
    other = make_member()
    members_url = f"{URL}{season_id}/members/"

    res = auth_client.post(members_url, {"member_id": member.pk})
    assert res.status_code == status.HTTP_201_CREATED
    assert res.json()["member_id"] == member.pk

    res = auth_client.post(members_url, {"member_id": member.pk})
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.json()["error_code"] == "ERR_ALREADY_ENROLLED"

    assert [m["id"] for m in auth_client.get(members_url).json()] == [member.pk]

    available = auth_client.get(f"{URL}{season_id}/available-members/").json()
    assert [m["id"] for m in available["data"]] == [other.pk]

    res = auth_client.delete(f"{members_url}{member.pk}/")
    assert res.status_code == status.HTTP_204_NO_CONTENT
    assert not Enrollment.objects.exists()

    res = auth_client.delete(f"{members_url}{member.pk}/")
    assert res.status_code == status.HTTP_404_NOT_FOUND
    assert res.json()["error_code"] == "ERR_ENROLLMENT_NOT_FOUND"


@pytest.mark.django_db
def test_available_members_is_paged_and_searchable(auth_client, make_member):
    season_id = _create(auth_client, "Summer", "2024-12-01", "2025-03-31").json()["id"]
    enrolled = make_member(first_name="Ana", last_name="Zapata")
    make_member(first_name="Bea", last_name="Alvarez", email="bea@club.org")
    make_member(first_name="Ana", last_name="Alvarez")
    make_member(first_name="Carla", last_name="Benitez", dni="555000")
    auth_client.post(
        f"{URL}{season_id}/members/", {"member_id": enrolled.pk}, format="json"
    )
    url = f"{URL}{season_id}/available-members/"

    second = auth_client.get(url, {"page": 2, "limit": 2}).json()
    assert [m["first_name"] for m in second["data"]] == ["Carla"]
    assert second["total"] == 3  # noqa: PLR2004
    assert second["total_pages"] == 2  # noqa: PLR2004

    found = auth_client.get(url, {"search": "club.ORG"}).json()
    assert [m["first_name"] for m in found["data"]] == ["Bea"]
    assert auth_client.get(f"{URL}999/available-members/").status_code == (
        status.HTTP_404_NOT_FOUND
    )
