"""Socket.IO server for live gate dashboards.

Connection details expected by the frontend:
- Socket.IO path: /ws/socket.io/
- Namespace: /pool-entries
- Auth: `query.token` or `auth.token` (JWT access token)

Clients in the pool namespace receive today's pool-access entries right
after connecting (`pool_entries:list`) and every time a new pool entry is
committed (`pool_entries:new` followed by a refreshed `pool_entries:list`).
"""

from __future__ import annotations

import functools
import logging
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

logger = logging.getLogger(__name__)

POOL_NAMESPACE = "/pool-entries"
EVENT_POOL_LIST = "pool_entries:list"
EVENT_POOL_NEW = "pool_entries:new"
EVENT_ERROR = "error"


def _client_manager() -> socketio.AsyncRedisManager | None:
    """Share rooms through Redis when a message queue is configured.

    Celery workers publish to the same queue, so their broadcasts reach the
    clients connected to any web process.
    """
    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "")
    return socketio.AsyncRedisManager(url) if url else None


sio = socketio.AsyncServer(
    async_mode="asgi",
    client_manager=_client_manager(),
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)


@database_sync_to_async
def _get_user_id_from_access_token(token: str) -> int:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return int(user.id)


@database_sync_to_async
def _current_pool_entries() -> list[dict[str, Any]]:
    from club_access.realtime.events.pool_entries import (  # noqa: PLC0415
        build_pool_entries_payload,
    )

    return build_pool_entries_payload()


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


async def authenticate(environ: dict[str, Any], auth: Any | None) -> int:
    """Return the user id behind the connection or refuse it."""
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    try:
        return await _get_user_id_from_access_token(token)
    except TokenError as exc:
        if "expired" in str(exc).lower():
            msg = "jwt_expired"
            raise ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except AuthenticationFailed as exc:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc


@sio.on("connect", namespace=POOL_NAMESPACE)
async def pool_connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    user_id = await authenticate(environ, auth)
    try:
        await sio.save_session(sid, {"user_id": user_id}, namespace=POOL_NAMESPACE)
        entries = await _current_pool_entries()
        await sio.emit(EVENT_POOL_LIST, entries, to=sid, namespace=POOL_NAMESPACE)
    except Exception as exc:
        logger.exception("Pool entries setup failed for %s", sid)
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc
    logger.info("User %s subscribed to pool entries (%s)", user_id, sid)


@sio.on("disconnect", namespace=POOL_NAMESPACE)
async def pool_disconnect(sid: str, *args):
    logger.debug("Pool entries client %s left", sid)


@sio.on("get_pool_entries", namespace=POOL_NAMESPACE)
async def get_pool_entries(sid: str, data: Any = None):
    try:
        entries = await _current_pool_entries()
        await sio.emit(EVENT_POOL_LIST, entries, to=sid, namespace=POOL_NAMESPACE)
    except Exception:
        logger.exception("Could not send pool entries to %s", sid)
        await sio.emit(
            EVENT_ERROR,
            {"message": "Could not load today's pool entries."},
            to=sid,
            namespace=POOL_NAMESPACE,
        )


@functools.lru_cache(maxsize=1)
def _queue_emitter(url: str) -> socketio.RedisManager:
    return socketio.RedisManager(url, write_only=True)


def emit_to_namespace(namespace: str, event: str, payload: Any) -> None:
    """Broadcast an event to every client of a namespace from sync code.

    With a message queue the event is published to Redis, which works from
    workers and web processes alike; otherwise it goes to this process's
    server directly.
    """

    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "")
    if url:
        _queue_emitter(url).emit(event, payload, namespace=namespace)
        return
    async_to_sync(sio.emit)(event, payload, namespace=namespace)
