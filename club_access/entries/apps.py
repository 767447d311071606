from django.apps import AppConfig


class EntriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "club_access.entries"
    verbose_name = "Entry records"

    def ready(self):
        import club_access.entries.signals  # noqa: F401, PLC0415
