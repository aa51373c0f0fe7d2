"""Translation of service errors into HTTP responses."""

from fastapi import HTTPException

from admissions.core.exceptions import AdmissionsError


def error_detail(kind: str, message: str) -> dict:
    """Body shared by every error response: {"kind": ..., "message": ...}."""
    return {"kind": kind, "message": message}


def to_http_exception(error: AdmissionsError) -> HTTPException:
    """
    Build the HTTPException for a service error.

    Retryable errors carry a Retry-After header.
    """
    headers = {"Retry-After": "5"} if error.retryable else None
    return HTTPException(
        status_code=error.status_code,
        detail=error_detail(error.kind, error.message),
        headers=headers,
    )

