from django.contrib import admin

from club_access.members.models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ["last_name", "first_name", "dni", "status", "joined_on"]
    list_filter = ["status", "gender"]
    search_fields = ["first_name", "last_name", "dni", "email"]
