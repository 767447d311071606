from django.db import models
from django.utils import timezone

from club_access.common import clock


class EntryCategory(models.TextChoices):
    CLUB_MEMBER = "CLUB_MEMBER", "Club member"
    POOL_MEMBER = "POOL_MEMBER", "Pool member"
    NON_MEMBER = "NON_MEMBER", "Non-member"


MEMBER_CATEGORIES = (EntryCategory.CLUB_MEMBER, EntryCategory.POOL_MEMBER)


class PaymentMethod(models.TextChoices):
    CASH = "CASH", "Cash"
    TRANSFER = "TRANSFER", "Transfer"


class EntryRecord(models.Model):
    """One check-in at the club gate.

    Members are referenced by ``member``; visitors by ``dni``. Records are
    append-only: the API never updates or deletes them. ``entry_date`` is the
    civil day in the club timezone, and at most one record per identity may
    exist for it.
    """

    member = models.ForeignKey(
        "members.Member",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="entries",
    )
    dni = models.CharField(max_length=20, blank=True, null=True, db_index=True)
    category = models.CharField(
        max_length=16, choices=EntryCategory.choices, db_index=True
    )
    pool_access = models.BooleanField(default=False)
    payment_method = models.CharField(
        max_length=16, choices=PaymentMethod.choices, blank=True, null=True
    )
    amount = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(
        default=timezone.now, editable=False, db_index=True
    )
    entry_date = models.DateField(default=clock.civil_today, db_index=True)

    class Meta:
        ordering = ["-created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["entry_date", "member"],
                condition=models.Q(member__isnull=False),
                name="unique_daily_member_entry",
            ),
            models.UniqueConstraint(
                fields=["entry_date", "dni"],
                condition=models.Q(dni__isnull=False),
                name="unique_daily_dni_entry",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        who = f"member={self.member_id}" if self.member_id else f"dni={self.dni}"
        return f"Entry({who}@{self.entry_date})"
