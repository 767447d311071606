import club_access.common.clock
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="EntryRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "dni",
                    models.CharField(
                        blank=True, db_index=True, max_length=20, null=True
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("CLUB_MEMBER", "Club member"),
                            ("POOL_MEMBER", "Pool member"),
                            ("NON_MEMBER", "Non-member"),
                        ],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                ("pool_access", models.BooleanField(default=False)),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[("CASH", "Cash"), ("TRANSFER", "Transfer")],
                        max_length=16,
                        null=True,
                    ),
                ),
                ("amount", models.PositiveIntegerField(default=0)),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                    ),
                ),
                (
                    "entry_date",
                    models.DateField(
                        db_index=True, default=club_access.common.clock.civil_today
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="entries",
                        to="members.member",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("member__isnull", False)),
                        fields=("entry_date", "member"),
                        name="unique_daily_member_entry",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("dni__isnull", False)),
                        fields=("entry_date", "dni"),
                        name="unique_daily_dni_entry",
                    ),
                ],
            },
        ),
    ]
