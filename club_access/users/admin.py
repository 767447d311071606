from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from club_access.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["username", "name", "is_staff", "is_active", "last_login"]
    search_fields = ["username", "name", "email"]
