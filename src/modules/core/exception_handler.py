"""Centralized error mapping: every failure becomes a problem document.

Registered as DRF's ``EXCEPTION_HANDLER``.  Domain errors are tagged with an
``ErrorKind`` and mapped through ``_PROBLEMS``; storage integrity errors and
DRF's own exceptions are normalized here as well.  Anything else is an
internal error: logged with its traceback, answered with a generic message.

Body shape (``application/problem+json``)::

    {"type": ..., "title": ..., "status": ..., "detail": ..., "instance": ...,
     "errors": [{"field": ..., "message": ..., "invalidValue": ...}]}
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ParseError, PermissionDenied
from rest_framework.response import Response

from modules.core.exceptions import ApiError, ErrorKind, Violation
from modules.core.messages import get_message, resolve_language

logger = structlog.get_logger(__name__)

PROBLEM_CONTENT_TYPE = "application/problem+json"

# kind -> (status, type slug, title key, detail key)
_PROBLEMS: Dict[ErrorKind, tuple] = {
    ErrorKind.VALIDATION: (
        status.HTTP_400_BAD_REQUEST,
        "validation-error",
        "error.title.validation",
        "validation.error.detail",
    ),
    ErrorKind.NOT_FOUND: (
        status.HTTP_404_NOT_FOUND,
        "product-not-found",
        "error.title.product.not.found",
        "product.not.found.detail",
    ),
    ErrorKind.ALREADY_EXISTS: (
        status.HTTP_409_CONFLICT,
        "product-already-exists",
        "error.title.product.already.exists",
        "product.already.exists.detail",
    ),
    ErrorKind.STORAGE_CONSTRAINT: (
        status.HTTP_409_CONFLICT,
        "database-constraint-violation",
        "error.title.database.constraint.violation",
        "database.constraint.violation.detail",
    ),
    ErrorKind.INTERNAL: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal-server-error",
        "error.title.internal.server.error",
        "internal.server.error.detail",
    ),
}

# MalformedRequest.problem -> (title key, detail key)
_MALFORMED: Dict[str, tuple] = {
    "parsing-error": ("error.title.parsing.error", "parsing.error.detail"),
    "type-mismatch": ("error.title.type.mismatch", "type.mismatch.detail"),
    "invalid-argument": ("error.title.invalid.argument", "illegal.argument.detail"),
}


def problem_type(slug: str) -> str:
    return f"{settings.PROBLEM_TYPE_BASE_URL.rstrip('/')}/{slug}"


def render_violations(violations: List[Violation], language: str) -> List[Dict[str, Any]]:
    """Render violations in order: field-level first, then object-level."""
    ordered = [v for v in violations if v.scope == "field"] + [
        v for v in violations if v.scope != "field"
    ]
    errors = []
    for violation in ordered:
        error: Dict[str, Any] = {
            "field": violation.field,
            "message": get_message(violation.message_key, language, **violation.params),
        }
        if violation.invalid_value is not None:
            error["invalidValue"] = str(violation.invalid_value)
        errors.append(error)
    return errors


def _problem(
    status_code: int,
    type_: str,
    title: str,
    detail: str,
    instance: str,
    **extra: Any,
) -> Response:
    body: Dict[str, Any] = {
        "type": type_,
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": instance,
    }
    body.update({key: value for key, value in extra.items() if value is not None})
    return Response(body, status=status_code, content_type=PROBLEM_CONTENT_TYPE)


def _from_api_error(exc: ApiError, language: str, instance: str) -> Response:
    errors = render_violations(exc.violations, language) if exc.violations else None

    if exc.kind is ErrorKind.MALFORMED_REQUEST:
        title_key, detail_key = _MALFORMED.get(exc.problem, _MALFORMED["invalid-argument"])
        return _problem(
            status.HTTP_400_BAD_REQUEST,
            problem_type(exc.problem),
            get_message(title_key, language),
            get_message(detail_key, language),
            instance,
            errors=errors,
        )

    status_code, slug, title_key, detail_key = _PROBLEMS[exc.kind]
    params = exc.message_params()
    extra = exc.problem_properties()
    if exc.kind is ErrorKind.VALIDATION:
        extra["errors"] = errors or []
    return _problem(
        status_code,
        problem_type(slug),
        get_message(title_key, language),
        get_message(detail_key, language, **params),
        instance,
        **extra,
    )


def _from_kind(kind: ErrorKind, language: str, instance: str) -> Response:
    status_code, slug, title_key, detail_key = _PROBLEMS[kind]
    return _problem(
        status_code,
        problem_type(slug),
        get_message(title_key, language),
        get_message(detail_key, language),
        instance,
    )


def _from_drf(exc: APIException, language: str, instance: str) -> Response:
    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else exc.default_detail
    try:
        title = HTTPStatus(status_code).phrase
    except ValueError:
        title = get_message("error.title.request", language)
    response = _problem(status_code, "about:blank", title, str(detail), instance)
    if getattr(exc, "auth_header", None):
        response["WWW-Authenticate"] = exc.auth_header
    if getattr(exc, "wait", None):
        response["Retry-After"] = str(int(exc.wait))
    return response


def problem_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF exception handler producing localized problem documents."""
    request = context.get("request")
    instance = request.path if request is not None else ""
    language = resolve_language(request)
    log = logger.bind(path=instance, error_type=type(exc).__name__)

    if isinstance(exc, ApiError):
        log.info("request.failed", kind=exc.kind.value, error=str(exc))
        return _from_api_error(exc, language, instance)

    if isinstance(exc, IntegrityError):
        log.warning("request.integrity_error", error=str(exc))
        return _from_kind(ErrorKind.STORAGE_CONSTRAINT, language, instance)

    if isinstance(exc, ParseError):
        log.info("request.unparseable_body", error=str(exc.detail))
        title_key, detail_key = _MALFORMED["parsing-error"]
        return _problem(
            status.HTTP_400_BAD_REQUEST,
            problem_type("parsing-error"),
            get_message(title_key, language),
            get_message(detail_key, language),
            instance,
        )

    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = PermissionDenied()

    if isinstance(exc, APIException):
        log.info("request.rejected", status_code=exc.status_code)
        return _from_drf(exc, language, instance)

    log.error("request.unexpected_error", exc_info=exc)
    return _from_kind(ErrorKind.INTERNAL, language, instance)
