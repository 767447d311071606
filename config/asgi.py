"""
ASGI config for the club_access project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/dev/howto/deployment/asgi/

"""

import os

from django.core.asgi import get_asgi_application

# If DJANGO_SETTINGS_MODULE is unset, select a sensible default based on BUILD_ENV
# Default to local settings for the local dev image, production otherwise.
if "DJANGO_SETTINGS_MODULE" not in os.environ:
    build_env = os.environ.get("BUILD_ENV", "production").lower()
    default_settings = (
        "config.settings.local"
        if build_env == "local"
        else "config.settings.production"
    )
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", default_settings)

django_application = get_asgi_application()

from socketio import ASGIApp  # noqa: E402

from club_access.realtime.socketio import sio  # noqa: E402

# Socket.IO handles both Engine.IO long-polling and WebSocket upgrades, so it
# wraps the Django app and forwards everything outside its path.
application = ASGIApp(
    sio,
    other_asgi_app=django_application,
    socketio_path="ws/socket.io",
)
