from django.contrib import admin

from club_access.entries.models import EntryRecord


@admin.register(EntryRecord)
class EntryRecordAdmin(admin.ModelAdmin):
    list_display = ["id", "entry_date", "category", "member", "dni", "pool_access"]
    list_filter = ["category", "pool_access", "entry_date"]
    search_fields = ["dni", "member__dni", "member__last_name"]
    raw_id_fields = ["member"]

    def has_change_permission(self, request, obj=None):
        return False
