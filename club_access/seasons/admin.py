from django.contrib import admin

from club_access.seasons.models import Enrollment
from club_access.seasons.models import Season


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    raw_id_fields = ["member"]


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    list_display = ["name", "start_date", "end_date"]
    inlines = [EnrollmentInline]
