import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework import status

from club_access.members.models import Member

URL = "/api/v1/members/"


def _png(name="photo.png"):
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color="blue").save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


@pytest.mark.django_db
def test_members_require_authentication(api_client):
    res = api_client.get(URL)
    assert res.status_code == status.HTTP_401_UNAUTHORIZED
    assert res.json()["error_code"] == "ERR_UNAUTHORIZED"


@pytest.mark.django_db
def test_create_member_with_photo(auth_client, photo_store):
    res = auth_client.post(
        URL,
        {"first_name": "Ana", "last_name": "Paz", "dni": "12345678", "photo": _png()},
        format="multipart",
    )
    assert res.status_code == status.HTTP_201_CREATED
    body = res.json()
    assert body["dni"] == "12345678"
    assert body["photo_url"] == photo_store.uploaded[0]
    assert body["status"] == Member.Status.ACTIVE


@pytest.mark.django_db
def test_create_member_rejects_fake_image(auth_client, photo_store):
    bogus = SimpleUploadedFile("photo.png", b"not an image", content_type="image/png")
    res = auth_client.post(
        URL,
        {"first_name": "Ana", "last_name": "Paz", "photo": bogus},
        format="multipart",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert "photo" in res.json()
    assert photo_store.uploaded == []


@pytest.mark.django_db
def test_create_member_rejects_unsupported_extension(auth_client, photo_store):
    res = auth_client.post(
        URL,
        {"first_name": "Ana", "last_name": "Paz", "photo": _png("photo.gif")},
        format="multipart",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert "photo" in res.json()


@pytest.mark.django_db
def test_duplicate_dni_is_conflict(auth_client, photo_store, make_member):
    make_member(dni="12345678")
    res = auth_client.post(
        URL, {"first_name": "Ana", "last_name": "Paz", "dni": "12345678"}
    )
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.json()["error_code"] == "ERR_DNI_EXISTS"


@pytest.mark.django_db
def test_list_members_paginated_and_filtered(auth_client, make_member):
    for i in range(3):
        make_member(last_name=f"Alvarez{i}")
    make_member(last_name="Benitez", status=Member.Status.INACTIVE)

    res = auth_client.get(URL, {"page": 1, "limit": 2, "search": "alvarez"})
    assert res.status_code == status.HTTP_200_OK
    body = res.json()
    assert body["total"] == 3  # noqa: PLR2004
    assert body["total_pages"] == 2  # noqa: PLR2004
    assert [m["last_name"] for m in body["data"]] == ["Alvarez0", "Alvarez1"]

    inactive = auth_client.get(URL, {"status": "INACTIVE"}).json()
    assert [m["last_name"] for m in inactive["data"]] == ["Benitez"]

    bogus = auth_client.get(URL, {"status": "BOGUS"})
    assert bogus.status_code == status.HTTP_400_BAD_REQUEST
    assert bogus.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.django_db
def test_partial_update_and_delete(auth_client, photo_store, make_member):
    member = make_member()
    res = auth_client.patch(f"{URL}{member.pk}/", {"phone": "555-1234"})
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["phone"] == "555-1234"

    res = auth_client.delete(f"{URL}{member.pk}/")
    assert res.status_code == status.HTTP_204_NO_CONTENT
    res = auth_client.get(f"{URL}{member.pk}/")
    assert res.status_code == status.HTTP_404_NOT_FOUND
    assert res.json()["error_code"] == "ERR_MEMBER_NOT_FOUND"


@pytest.mark.django_db
def test_classify_unknown_dni(auth_client):
    res = auth_client.get(f"{URL}classify/99999999/")
    assert res.status_code == status.HTTP_200_OK
    assert res.json() == {"dni": "99999999", "category": "NON_MEMBER", "member": None}
