from __future__ import annotations

import getpass

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.core.management.base import CommandError
from django.core.management.base import CommandParser


class Command(BaseCommand):
    help = (
        "Print a password hash for seeding back-office users by hand. "
        "Refuses to run under production settings."
    )

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--password",
            dest="password",
            help="Plain-text password to hash (omit to be prompted securely)",
        )
        parser.add_argument(
            "--hasher",
            dest="hasher",
            choices=["default", "pbkdf2_sha256", "bcrypt_sha256"],
            default="default",
            help="'default' uses the first entry in PASSWORD_HASHERS.",
        )

    def handle(self, *args, **options) -> str | None:
        if str(getattr(settings, "SETTINGS_MODULE", "")).endswith(".production"):
            msg = "hash_password is disabled under production settings."
            raise CommandError(msg)

        pwd: str | None = options.get("password")
        hasher: str = options.get("hasher") or "default"

        if not pwd:
            pwd = getpass.getpass("Password: ")
            confirm = getpass.getpass("Confirm:  ")
            if pwd != confirm:
                self.stderr.write(self.style.ERROR("Passwords do not match."))
                return None

        hashed = make_password(pwd) if hasher == "default" else make_password(
            pwd, hasher=hasher
        )
        # Print the hash only
        self.stdout.write(hashed)
        return None
