"""Typed API errors and the DRF exception handler that renders them.

Every business-rule violation is an ``APIException`` subclass carrying a
stable ``error_code`` that clients can switch on. Unclassified errors are
logged in full and rendered with a generic message.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError
from rest_framework import exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

ERR_VALIDATION = "ERR_VALIDATION"
ERR_UNAUTHORIZED = "ERR_UNAUTHORIZED"
ERR_FORBIDDEN = "ERR_FORBIDDEN"
ERR_NOT_FOUND = "ERR_NOT_FOUND"
ERR_THROTTLED = "ERR_THROTTLED"
ERR_DB_UNIQUE = "ERR_DB_UNIQUE"
ERR_INTERNAL_SERVER = "ERR_INTERNAL_SERVER"


class ClubError(exceptions.APIException):
    """Base class for business errors surfaced to API clients."""

    error_code = ERR_INTERNAL_SERVER


# NotFound -----------------------------------------------------------------
class ResourceNotFound(ClubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"
    error_code = ERR_NOT_FOUND


class MemberNotFound(ResourceNotFound):
    default_detail = "Member not found."
    error_code = "ERR_MEMBER_NOT_FOUND"


class SeasonNotFound(ResourceNotFound):
    default_detail = "Season not found."
    error_code = "ERR_SEASON_NOT_FOUND"


class EnrollmentNotFound(ResourceNotFound):
    default_detail = "The member is not enrolled in this season."
    error_code = "ERR_ENROLLMENT_NOT_FOUND"


class EntryNotFound(ResourceNotFound):
    default_detail = "Entry record not found."
    error_code = "ERR_ENTRY_NOT_FOUND"


# Conflict -----------------------------------------------------------------
class Conflict(ClubError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflicting state."
    default_code = "conflict"
    error_code = ERR_DB_UNIQUE


class DuplicateDni(Conflict):
    default_detail = "A member with this DNI is already registered."
    error_code = "ERR_DNI_EXISTS"


class DuplicateEntryToday(Conflict):
    default_detail = "This person has already been checked in today."
    error_code = "ERR_ALREADY_REGISTERED_TODAY"


class OverlappingSeasons(Conflict):
    default_detail = "The dates overlap with an existing season."
    error_code = "ERR_OVERLAPPING_SEASONS"


class AlreadyEnrolled(Conflict):
    default_detail = "The member is already enrolled in this season."
    error_code = "ERR_ALREADY_ENROLLED"


# Validation ---------------------------------------------------------------
class InvalidInput(ClubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"
    error_code = ERR_VALIDATION


class InvalidEntryIdentity(InvalidInput):
    default_detail = (
        "NON_MEMBER entries require 'dni' and no 'member'; member entries "
        "require 'member' and no 'dni'."
    )


# Upstream -----------------------------------------------------------------
class UpstreamFailure(ClubError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "An external service failed."
    default_code = "upstream_failure"
    error_code = "ERR_UPSTREAM"


_DRF_CODES = {
    exceptions.ValidationError: ERR_VALIDATION,
    exceptions.ParseError: ERR_VALIDATION,
    exceptions.NotAuthenticated: ERR_UNAUTHORIZED,
    exceptions.AuthenticationFailed: ERR_UNAUTHORIZED,
    exceptions.PermissionDenied: ERR_FORBIDDEN,
    exceptions.NotFound: ERR_NOT_FOUND,
    exceptions.Throttled: ERR_THROTTLED,
}


def _error_code_for(exc: Exception) -> str | None:
    if isinstance(exc, ClubError):
        return exc.error_code
    for klass, code in _DRF_CODES.items():
        if isinstance(exc, klass):
            return code
    return None


def api_exception_handler(exc, context):
    """Attach ``error_code`` to API errors and hide internals of the rest."""
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error escaped the service layer: %s", exc)
        exc = Conflict("The value already exists.")

    response = exception_handler(exc, context)
    if response is not None:
        code = _error_code_for(exc)
        if code:
            if isinstance(response.data, dict):
                response.data["error_code"] = code
            else:
                response.data = {"detail": response.data, "error_code": code}
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled error in %s",
        view.__class__.__name__ if view is not None else "unknown view",
        exc_info=exc,
    )
    if settings.DEBUG:
        return None
    return Response(
        {"detail": "Internal server error.", "error_code": ERR_INTERNAL_SERVER},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
