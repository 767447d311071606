import datetime as dt
import itertools
from unittest import mock

import pytest
from rest_framework.test import APIClient

from club_access.common import clock
from club_access.integrations.photos.client import PhotoStore
from club_access.integrations.photos.client import PhotoUploadError
from club_access.integrations.photos.client import UploadedPhoto
from club_access.members.models import Member
from club_access.users.models import User


class FakePhotoStore(PhotoStore):
    """In-memory stand-in for Cloudinary that records every call."""

    def __init__(self):
        self.uploaded: list[str] = []
        self.deleted: list[str] = []
        self.fail_uploads = False
        self._ids = itertools.count(1)

    def upload(self, file):
        if self.fail_uploads:
            raise PhotoUploadError
        n = next(self._ids)
        url = f"https://res.cloudinary.com/test/image/upload/v1/members/photo{n}.jpg"
        self.uploaded.append(url)
        return UploadedPhoto(url=url, public_id=f"members/photo{n}")

    def delete(self, url):
        self.deleted.append(url)
        return {"result": "ok"}


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="gatekeeper", email="gate@example.com", password="s3cret-pass!"
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def photo_store(monkeypatch):
    store = FakePhotoStore()
    monkeypatch.setattr("club_access.members.services.get_photo_store", lambda: store)
    monkeypatch.setattr("club_access.members.tasks.get_photo_store", lambda: store)
    return store


@pytest.fixture
def make_member(db):
    seq = itertools.count(1)

    def _make(**kwargs):
        n = next(seq)
        fields = {
            "first_name": f"Name{n}",
            "last_name": f"Surname{n}",
            "dni": f"{40000000 + n}",
        }
        fields.update(kwargs)
        return Member.objects.create(**fields)

    return _make


@pytest.fixture
def freeze_clock(monkeypatch):
    """Pin ``clock.now`` to an aware instant; returns the setter."""

    def _freeze(instant: dt.datetime):
        monkeypatch.setattr(clock, "now", lambda: instant)
        return instant

    return _freeze


@pytest.fixture
def broadcasts(monkeypatch):
    """Capture realtime broadcasts instead of reaching Socket.IO."""
    emit = mock.Mock()
    monkeypatch.setattr(
        "club_access.realtime.events.pool_entries.emit_to_namespace", emit
    )
    return emit
