import datetime as dt

import pytest

from club_access.common.exceptions import AlreadyEnrolled
from club_access.common.exceptions import EnrollmentNotFound
from club_access.common.exceptions import InvalidInput
from club_access.common.exceptions import MemberNotFound
from club_access.common.exceptions import OverlappingSeasons
from club_access.common.exceptions import SeasonNotFound
from club_access.seasons import services
from club_access.seasons.models import Enrollment
from club_access.seasons.models import Season


def _season(name, start, end):
    return services.create_season(
        {
            "name": name,
            "start_date": dt.date.fromisoformat(start),
            "end_date": dt.date.fromisoformat(end),
        }
    )


@pytest.mark.django_db
class TestSeasonRanges:
    def test_shared_boundary_day_overlaps(self):
        _season("Summer", "2025-01-01", "2025-01-10")
        with pytest.raises(OverlappingSeasons) as exc:
            _season("Late summer", "2025-01-10", "2025-01-20")
        assert "Summer" in str(exc.value.detail)

    def test_adjacent_ranges_are_allowed(self):
        _season("Summer", "2025-01-01", "2025-01-10")
        _season("Late summer", "2025-01-11", "2025-01-20")
        assert Season.objects.count() == 2  # noqa: PLR2004

    def test_enclosing_range_overlaps(self):
        _season("Summer", "2025-01-05", "2025-01-06")
        with pytest.raises(OverlappingSeasons):
            _season("Everything", "2025-01-01", "2025-02-01")

    def test_start_after_end_is_invalid(self):
        with pytest.raises(InvalidInput):
            _season("Backwards", "2025-02-01", "2025-01-01")

    def test_update_excludes_self(self):
        season = _season("Summer", "2025-01-01", "2025-01-10")
        updated = services.update_season(
            season.pk, {"end_date": dt.date(2025, 1, 15)}
        )
        assert updated.start_date == dt.date(2025, 1, 1)
        assert updated.end_date == dt.date(2025, 1, 15)

    def test_update_cannot_move_into_another_season(self):
        _season("Summer", "2025-01-01", "2025-01-10")
        other = _season("Autumn", "2025-03-01", "2025-03-10")
        with pytest.raises(OverlappingSeasons):
            services.update_season(other.pk, {"start_date": dt.date(2025, 1, 9)})

    def test_partial_update_checks_merged_dates(self):
        season = _season("Summer", "2025-01-01", "2025-01-10")
        with pytest.raises(InvalidInput):
            services.update_season(season.pk, {"start_date": dt.date(2025, 2, 1)})

    def test_list_is_newest_first(self):
        _season("Old", "2023-12-01", "2024-03-31")
        _season("New", "2024-12-01", "2025-03-31")
        assert [s.name for s in services.list_seasons()] == ["New", "Old"]

    def test_current_season(self):
        _season("Summer", "2024-12-01", "2025-03-31")
        assert services.current_season(dt.date(2025, 1, 15)).name == "Summer"
        assert services.current_season(dt.date(2025, 4, 1)) is None

    def test_delete_missing_season(self):
        with pytest.raises(SeasonNotFound):
            services.delete_season(404)


@pytest.mark.django_db
class TestEnrollment:
    def test_enroll_and_unenroll(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        member = make_member()

        services.enroll(season.pk, member.pk)
        assert services.is_enrolled(season.pk, member.pk)
        assert list(services.members_of(season.pk)) == [member]

        services.unenroll(season.pk, member.pk)
        assert not services.is_enrolled(season.pk, member.pk)

    def test_double_enroll_is_conflict(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        member = make_member()
        services.enroll(season.pk, member.pk)
        with pytest.raises(AlreadyEnrolled):
            services.enroll(season.pk, member.pk)
        assert Enrollment.objects.count() == 1

    def test_enroll_unknown_member_or_season(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        with pytest.raises(MemberNotFound):
            services.enroll(season.pk, 999)
        with pytest.raises(SeasonNotFound):
            services.enroll(999, make_member().pk)

    def test_unenroll_missing_enrollment(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        with pytest.raises(EnrollmentNotFound):
            services.unenroll(season.pk, make_member().pk)

    def test_deleting_season_cascades_enrollments(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        services.enroll(season.pk, make_member().pk)
        services.delete_season(season.pk)
        assert not Enrollment.objects.exists()

    def test_available_members_excludes_enrolled_and_searches(self, make_member):
        season = _season("Summer", "2024-12-01", "2025-03-31")
        enrolled = make_member(first_name="Ana", last_name="Zapata")
        make_member(first_name="Bea", last_name="Alvarez", email="bea@club.org")
        make_member(first_name="Ana", last_name="Alvarez")
        make_member(first_name="Carla", last_name="Benitez", dni="555000")
        services.enroll(season.pk, enrolled.pk)

        available = services.available_members(season.pk)
        assert [(m.last_name, m.first_name) for m in available] == [
            ("Alvarez", "Ana"),
            ("Alvarez", "Bea"),
            ("Benitez", "Carla"),
        ]
        assert services.available_members(season.pk, search="ANA").count() == 1
        assert services.available_members(season.pk, search="club.ORG").count() == 1
        assert services.available_members(season.pk, search="555").count() == 1
