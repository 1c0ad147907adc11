"""Mapping of service exceptions to HTTP errors for API v1 route modules."""

from __future__ import annotations

from fastapi import HTTPException

from invoicing.core.exceptions import ForbiddenError, NotFoundError, ValidationError


def map_service_error(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, NotFoundError):
        return 404, str(exc)
    if isinstance(exc, ForbiddenError):
        return 403, str(exc)
    if isinstance(exc, ValidationError):
        return 422, str(exc)
    return 500, "Internal error."


def to_http_exception(exc: Exception) -> HTTPException:
    code, detail = map_service_error(exc)
    return HTTPException(status_code=code, detail=detail)
