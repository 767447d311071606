from io import StringIO

import pytest
from django.contrib.auth.hashers import check_password
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import override_settings


def test_hash_password_prints_usable_hash():
    out = StringIO()
    call_command("hash_password", password="s3cret-pass", stdout=out)
    hashed = out.getvalue().strip()
    assert hashed
    assert check_password("s3cret-pass", hashed)


def test_hash_password_refuses_production_settings():
    with (
        override_settings(SETTINGS_MODULE="config.settings.production"),
        pytest.raises(CommandError),
    ):
        call_command("hash_password", password="whatever")
