from django.db import models


class Season(models.Model):
    """A pool season: an inclusive range of civil dates.

    Seasons never overlap; the registry enforces this on create and update.
    """

    name = models.CharField(max_length=100)
    start_date = models.DateField()
    end_date = models.DateField()
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_date__lte=models.F("end_date")),
                name="season_start_before_end",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"{self.name} ({self.start_date}..{self.end_date})"

    def covers(self, day) -> bool:
        return self.start_date <= day <= self.end_date


class Enrollment(models.Model):
    season = models.ForeignKey(
        Season, on_delete=models.CASCADE, related_name="enrollments"
    )
    member = models.ForeignKey(
        "members.Member", on_delete=models.CASCADE, related_name="enrollments"
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["season_id", "member_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["season", "member"], name="unique_season_member"
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"Enrollment({self.member_id}@{self.season_id})"
