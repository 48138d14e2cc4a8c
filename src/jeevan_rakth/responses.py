from __future__ import annotations

import traceback
from typing import Any

import structlog
from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)

UNKNOWN_ERROR = "UNKNOWN_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
ORDERS_FETCH_FAILED = "ORDERS_FETCH_FAILED"
DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"

_MISSING = object()


def success_response(
    message: str,
    data: Any = None,
    *,
    status: int = 200,
    meta: Any = _MISSING,
) -> JsonResponse:
    """
    Envelope for successful responses.

    ``meta`` is only present in the body when passed.
    """
    payload: dict[str, Any] = {"success": True, "message": message, "data": data}
    if meta is not _MISSING:
        payload["meta"] = meta
    payload["timestamp"] = timezone.now().isoformat()
    return JsonResponse(payload, status=status)


def error_response(
    message: str,
    *,
    status: int = 400,
    code: str = UNKNOWN_ERROR,
    details: Any = _MISSING,
) -> JsonResponse:
    error: dict[str, Any] = {"code": code}
    if details is not _MISSING:
        error["details"] = details
    return JsonResponse(
        {
            "success": False,
            "message": message,
            "error": error,
            "timestamp": timezone.now().isoformat(),
        },
        status=status,
    )


def handle_error(
    exc: BaseException,
    context: str,
    *,
    status: int = 500,
    code: str = UNKNOWN_ERROR,
) -> JsonResponse:
    """
    Log an unexpected failure and answer without leaking internals.

    With ``DEBUG`` on, the response carries the exception message and its
    stack; otherwise a generic message and no details.
    """
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(
        "request_failed",
        context=context,
        code=code,
        error=str(exc),
        stack=stack if settings.DEBUG else "REDACTED",
    )

    if settings.DEBUG:
        return error_response(
            str(exc) or "Unknown error", status=status, code=code, details={"stack": stack}
        )

    return error_response(
        "Something went wrong. Please try again later.", status=status, code=code
    )
