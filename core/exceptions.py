"""Project-wide DRF exception handler.

Renders every error as ``{"success": false, "message": ..., "details"|"error": ...}``.
Validation failures carry the first offending message in ``details``; server
errors carry ``error``, which holds the internal message only when
``APP_ENV == "development"``. Server errors are always logged with traceback.
"""

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _first_message(detail) -> str:
    """Return the first readable message of a (possibly nested) DRF detail."""
    if isinstance(detail, dict):
        if not detail:
            return ""
        key, value = next(iter(detail.items()))
        message = _first_message(value)
        return message if key in ("detail", "non_field_errors") else f"{key}: {message}"
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def _error_text(exc) -> str:
    if getattr(settings, "APP_ENV", "production") != "development":
        return INTERNAL_ERROR
    return str(exc.__cause__ or exc)


def _view_name(context) -> str:
    view = context.get("view") if context else None
    return type(view).__name__ if view is not None else "unknown view"


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        logger.error("Unhandled error in %s", _view_name(context), exc_info=exc)
        body = {"success": False, "message": INTERNAL_ERROR, "error": _error_text(exc)}
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        body = {
            "success": False,
            "message": "Validation error",
            "details": _first_message(response.data),
        }
    elif response.status_code >= 500:
        logger.error("Server error in %s", _view_name(context), exc_info=exc)
        body = {
            "success": False,
            "message": _first_message(response.data),
            "error": _error_text(exc),
        }
    else:
        body = {"success": False, "message": _first_message(response.data)}

    response.data = body
    return response
