import os

from celery import Celery
from celery.signals import setup_logging

# Workers default to production settings; pytest and local runs export
# DJANGO_SETTINGS_MODULE first, so setdefault leaves theirs alone.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("club_access")

# Settings keys prefixed with CELERY_ configure the app (e.g. CELERY_BROKER_URL).
app.config_from_object("django.conf:settings", namespace="CELERY")


@setup_logging.connect
def config_loggers(*args, **kwargs):
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


# Picks up members.tasks and any other <app>/tasks.py.
app.autodiscover_tasks()
