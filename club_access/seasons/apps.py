from django.apps import AppConfig


class SeasonsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "club_access.seasons"
    verbose_name = "Pool seasons"
