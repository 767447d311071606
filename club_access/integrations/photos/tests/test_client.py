import io
from unittest import mock

import pytest

from club_access.integrations.photos.client import CloudinaryPhotoStore
from club_access.integrations.photos.client import PhotoUploadError
from club_access.integrations.photos.client import get_photo_store
from club_access.integrations.photos.client import public_id_from_url

URL = "https://res.cloudinary.com/demo/image/upload/v1712345678/members/abc123.jpg"


def test_public_id_strips_version_and_extension():
    assert public_id_from_url(URL) == "members/abc123"


def test_public_id_without_version():
    url = "https://res.cloudinary.com/demo/image/upload/members/xyz.png"
    assert public_id_from_url(url) == "members/xyz"


@mock.patch("club_access.integrations.photos.client.time.sleep")
@mock.patch("club_access.integrations.photos.client.cloudinary.uploader.upload")
def test_upload_retries_then_succeeds(upload, sleep):
    upload.side_effect = [
        RuntimeError("timeout"),
        {"secure_url": URL, "public_id": "members/abc123"},
    ]
    store = CloudinaryPhotoStore(retry_delay=1.0)

    photo = store.upload(io.BytesIO(b"img"))

    assert photo.url == URL
    assert photo.public_id == "members/abc123"
    assert upload.call_count == 2  # noqa: PLR2004
    sleep.assert_called_once_with(1.0)


@mock.patch("club_access.integrations.photos.client.time.sleep")
@mock.patch("club_access.integrations.photos.client.cloudinary.uploader.upload")
def test_upload_gives_up_after_three_attempts(upload, sleep):
    upload.side_effect = RuntimeError("down")
    store = CloudinaryPhotoStore(retry_delay=1.0)

    with pytest.raises(PhotoUploadError):
        store.upload(io.BytesIO(b"img"))

    assert upload.call_count == 3  # noqa: PLR2004
    assert sleep.call_count == 2  # noqa: PLR2004


@mock.patch("club_access.integrations.photos.client.cloudinary.uploader.destroy")
def test_delete_uses_public_id(destroy):
    destroy.return_value = {"result": "ok"}

    assert CloudinaryPhotoStore().delete(URL) == {"result": "ok"}
    destroy.assert_called_once_with("members/abc123")


def test_get_photo_store_reads_backend_setting(settings):
    settings.PHOTO_STORE_BACKEND = (
        "club_access.integrations.photos.client.CloudinaryPhotoStore"
    )
    assert isinstance(get_photo_store(), CloudinaryPhotoStore)
