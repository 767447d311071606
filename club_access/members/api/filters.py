import django_filters

from club_access.members.models import Member
from club_access.members.services import search_filter


class MemberFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.ChoiceFilter(choices=Member.Status.choices)
    gender = django_filters.ChoiceFilter(choices=Member.Gender.choices)
    dni = django_filters.CharFilter(field_name="dni", lookup_expr="exact")

    class Meta:
        model = Member
        fields = ["search", "status", "gender", "dni"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        return queryset.filter(search_filter(value)) if value else queryset
