"""
API error mapping.

Translates operation error codes into HTTP statuses and the error
envelope ``{"success": false, "error": {code, message, details}}``.
"""

from typing import Any

from fastapi import status

from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.domains.scheduling.application.dto import OperationError
from clinic_scheduler.domains.scheduling.domain.value_objects import SchedulingErrorCode

STATUS_BY_CODE: dict[str, int] = {
    SchedulingErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    SchedulingErrorCode.INVALID_PATIENT.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.INVALID_DOCTOR.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.INVALID_TIME_RANGE.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.INVALID_PAYLOAD.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.TIME_CONFLICT.value: status.HTTP_409_CONFLICT,
    SchedulingErrorCode.ALREADY_INACTIVE.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.ALREADY_ACTIVE.value: status.HTTP_400_BAD_REQUEST,
    SchedulingErrorCode.PLAN_LIMIT_EXCEEDED.value: status.HTTP_403_FORBIDDEN,
    SchedulingErrorCode.DUPLICATE_EMAIL.value: status.HTTP_409_CONFLICT,
    SchedulingErrorCode.DUPLICATE_LICENSE.value: status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
}


def status_for_code(code: str) -> int:
    return STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message, "details": details or {}}}


class ApiError(Exception):
    """Error raised by routes and dependencies; rendered by the exception handlers."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code or status_for_code(code)
        super().__init__(message)

    @classmethod
    def from_operation_error(cls, error: OperationError) -> "ApiError":
        return cls(error.code, error.message, error.details)

    @classmethod
    def from_domain_exception(cls, error: DomainException) -> "ApiError":
        return cls(error.code, error.message, error.details)

    def to_body(self) -> dict[str, Any]:
        return error_body(self.code, self.message, self.details)


def raise_for_error(error: OperationError | None) -> None:
    """Raise the ApiError of a failed operation result."""
    if error is not None:
        raise ApiError.from_operation_error(error)
