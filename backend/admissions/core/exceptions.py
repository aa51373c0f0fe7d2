"""Error taxonomy shared by services and API endpoints."""

from typing import Optional


class AdmissionsError(Exception):
    """
    Base class for expected, operational errors.

    Attributes:
        message: Human-readable description safe to return to API callers
        status_code: HTTP status the API layer maps this error to
        retryable: Whether the caller may retry the same request unchanged
    """

    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def kind(self) -> str:
        """Error kind exposed to API callers."""
        return type(self).__name__


class NotFoundError(AdmissionsError):
    """Requested application, result, program or document does not exist."""

    status_code = 404


class ValidationError(AdmissionsError):
    """Malformed or inconsistent input."""

    status_code = 400


class InvalidStatusTransitionError(ValidationError):
    """Requested application status change is not allowed from the current state."""


class ServiceUnavailableError(AdmissionsError):
    """Underlying data store is unreachable."""

    status_code = 503
    retryable = True


class InternalLogicError(AdmissionsError):
    """Unexpected state after all inputs were fetched successfully."""

    status_code = 500
