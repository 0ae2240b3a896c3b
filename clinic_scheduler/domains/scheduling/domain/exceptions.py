"""
Scheduling Domain Exceptions

One exception per error kind exposed by the scheduling operations.
Each carries a SchedulingErrorCode as its ``code``.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from clinic_scheduler.core.domain import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)

from .value_objects.appointment_status import ResourceKind, SchedulingErrorCode


class AppointmentNotFoundException(EntityNotFoundException):
    """Appointment absent or owned by another tenant."""

    def __init__(self, appointment_id: UUID):
        super().__init__("Appointment", appointment_id, "Appointment not found")


class DoctorNotFoundException(EntityNotFoundException):
    def __init__(self, doctor_id: UUID):
        super().__init__("Doctor", doctor_id, "Doctor not found")


class PatientNotFoundException(EntityNotFoundException):
    def __init__(self, patient_id: UUID):
        super().__init__("Patient", patient_id, "Patient not found")


class InvalidTimeRangeException(ValidationException):
    """Raised when an interval does not satisfy ``start < end``."""

    def __init__(self, start: datetime | None, end: datetime | None, message: str | None = None):
        self.start = start
        self.end = end
        super().__init__(
            message or "End time must be after start time",
            field="end_time",
            details={
                "start_time": start.isoformat() if start else None,
                "end_time": end.isoformat() if end else None,
            },
            code=SchedulingErrorCode.INVALID_TIME_RANGE.value,
        )


class InvalidPayloadException(ValidationException):
    """Raised when operation input is malformed."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, field=field, details=details, code=SchedulingErrorCode.INVALID_PAYLOAD.value)


class InvalidPatientException(BusinessRuleViolationException):
    """Patient missing, inactive, or owned by another tenant."""

    def __init__(self, patient_id: UUID):
        self.patient_id = patient_id
        super().__init__(
            "patient_belongs_to_tenant",
            "Patient not found or inactive",
            {"patient_id": str(patient_id)},
            code=SchedulingErrorCode.INVALID_PATIENT.value,
        )


class InvalidDoctorException(BusinessRuleViolationException):
    """Doctor missing, inactive, or owned by another tenant."""

    def __init__(self, doctor_id: UUID):
        self.doctor_id = doctor_id
        super().__init__(
            "doctor_belongs_to_tenant",
            "Doctor not found or inactive",
            {"doctor_id": str(doctor_id)},
            code=SchedulingErrorCode.INVALID_DOCTOR.value,
        )


class TimeConflictException(DomainException):
    """Raised when the doctor already has a blocking appointment in the interval."""

    def __init__(
        self,
        doctor_id: UUID | None = None,
        conflicting_appointment_id: UUID | None = None,
        message: str | None = None,
    ):
        self.doctor_id = doctor_id
        self.conflicting_appointment_id = conflicting_appointment_id
        details: dict[str, Any] = {}
        if doctor_id:
            details["doctor_id"] = str(doctor_id)
        if conflicting_appointment_id:
            details["conflicting_appointment_id"] = str(conflicting_appointment_id)
        super().__init__(
            message or "Doctor has another appointment at this time",
            SchedulingErrorCode.TIME_CONFLICT.value,
            details,
        )


class AlreadyInactiveException(InvalidOperationException):
    def __init__(self, entity_type: str, operation: str = "delete", message: str | None = None):
        super().__init__(
            operation,
            "inactive",
            message or f"{entity_type} is already inactive",
            code=SchedulingErrorCode.ALREADY_INACTIVE.value,
        )


class AlreadyActiveException(InvalidOperationException):
    def __init__(self, entity_type: str, operation: str = "restore"):
        super().__init__(
            operation,
            "active",
            f"{entity_type} is already active",
            code=SchedulingErrorCode.ALREADY_ACTIVE.value,
        )


class PlanLimitExceededException(DomainException):
    """Raised when a tenant has used every seat of a resource kind in its plan."""

    def __init__(self, kind: ResourceKind, current_count: int, limit: int, message: str):
        self.kind = kind
        self.current_count = current_count
        self.limit = limit
        super().__init__(
            message,
            SchedulingErrorCode.PLAN_LIMIT_EXCEEDED.value,
            {"resource": kind.value, "current_count": current_count, "limit": limit},
        )


class DuplicateEmailException(DuplicateEntityException):
    def __init__(self, entity_type: str, email: str):
        super().__init__(entity_type, "email", email, code=SchedulingErrorCode.DUPLICATE_EMAIL.value)


class DuplicateLicenseException(DuplicateEntityException):
    def __init__(self, license_number: str):
        super().__init__("Doctor", "license_number", license_number, code=SchedulingErrorCode.DUPLICATE_LICENSE.value)
