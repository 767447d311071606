"""
With these settings, tests run faster.
"""

from .base import *  # noqa: F403
from .base import DATABASES
from .base import REST_FRAMEWORK
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="tD8uXw2kR7pZ0mQ5nC3vB9sL1yH6gF4jA8eK2oW7iU0rT5qN3zM1xV9cS6bP4dE",
)
# https://docs.djangoproject.com/en/dev/ref/settings/#test-runner
TEST_RUNNER = "django.test.runner.DiscoverRunner"
ALLOWED_HOSTS = ["testserver", "localhost"]

# PASSWORDS
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#password-hashers
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# CACHES
# ------------------------------------------------------------------------------
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "",
    },
}

# CELERY
# ------------------------------------------------------------------------------
# https://docs.celeryq.dev/en/stable/userguide/configuration.html#task-always-eager
CELERY_TASK_ALWAYS_EAGER = True
# https://docs.celeryq.dev/en/stable/userguide/configuration.html#task-eager-propagates
CELERY_TASK_EAGER_PROPAGATES = True

# SOCKET.IO
# ------------------------------------------------------------------------------
SOCKETIO_MESSAGE_QUEUE = ""

# PHOTOS
# ------------------------------------------------------------------------------
# Tests never reach Cloudinary; fixtures swap the store in.
PHOTO_UPLOAD_RETRY_DELAY = 0
CLOUDINARY_CLOUD_NAME = "test"
CLOUDINARY_API_KEY = "test"
CLOUDINARY_API_SECRET = "test"  # noqa: S105

# Throttling stays on but with room for the suites that log in repeatedly.
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {"login": "100/min"}

# Force Postgres test DB to use template0 to avoid collation
# version mismatch in containerized environments
if DATABASES["default"]["ENGINE"].endswith("postgresql"):
    DATABASES["default"].setdefault("TEST", {})
    DATABASES["default"]["TEST"]["TEMPLATE"] = "template0"
