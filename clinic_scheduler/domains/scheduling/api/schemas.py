"""
Scheduling API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from clinic_scheduler.domains.scheduling.application.dto import (
    AppointmentStats,
    LimitCheckResult,
    PlanLimitStatus,
)
from clinic_scheduler.domains.scheduling.domain.entities import Appointment, Doctor, Patient
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus

TEXT_MAX = 5000

# ============================================================================
# Appointments
# ============================================================================


class AppointmentCreateSchema(BaseModel):
    """Appointment creation payload."""

    model_config = ConfigDict(extra="forbid")

    patient_id: UUID
    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    duration: int | None = Field(default=None, gt=0, description="Minutes; must match the interval")
    status: AppointmentStatus | None = None
    type: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=TEXT_MAX)
    private_notes: str | None = Field(default=None, max_length=TEXT_MAX)
    cost: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    is_paid: bool = Field(default=False, description="Payment intent; records a payment when cost > 0")


class AppointmentUpdateSchema(BaseModel):
    """
    Appointment update payload.

    Only fields present in the body are applied. ``null`` clears the
    optional text and cost fields.
    """

    model_config = ConfigDict(extra="forbid")

    patient_id: UUID | None = None
    doctor_id: UUID | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    status: AppointmentStatus | None = None
    type: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=TEXT_MAX)
    private_notes: str | None = Field(default=None, max_length=TEXT_MAX)
    cost: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class MarkDoneSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    notes: str | None = Field(default=None, max_length=TEXT_MAX)


class PatientSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class DoctorSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    specialty: str | None = None
    email: str | None = None


class AppointmentSchema(BaseModel):
    """Appointment response schema."""

    id: UUID
    tenant_id: UUID
    patient_id: UUID
    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    duration: int
    status: AppointmentStatus
    type: str | None = None
    notes: str | None = None
    private_notes: str | None = None
    cost: Decimal | None = None
    is_paid: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    patient: PatientSummarySchema | None = None
    doctor: DoctorSummarySchema | None = None

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            tenant_id=appointment.tenant_id,
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            duration=appointment.duration_minutes,
            status=appointment.status,
            type=appointment.appointment_type,
            notes=appointment.notes,
            private_notes=appointment.private_notes,
            cost=appointment.cost,
            is_paid=appointment.is_paid,
            is_active=appointment.is_active,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
            patient=PatientSummarySchema.model_validate(appointment.patient) if appointment.patient else None,
            doctor=DoctorSummarySchema.model_validate(appointment.doctor) if appointment.doctor else None,
        )


class AppointmentStatsSchema(BaseModel):
    total: int
    scheduled: int
    completed: int
    cancelled: int
    no_show: int
    today_count: int
    week_count: int
    revenue: Decimal
    pending_payment: Decimal

    @classmethod
    def from_stats(cls, stats: AppointmentStats) -> "AppointmentStatsSchema":
        return cls(
            total=stats.total,
            scheduled=stats.scheduled,
            completed=stats.completed,
            cancelled=stats.cancelled,
            no_show=stats.no_show,
            today_count=stats.today_count,
            week_count=stats.week_count,
            revenue=stats.revenue,
            pending_payment=stats.pending_payment,
        )


# ============================================================================
# Doctors and patients
# ============================================================================


class DoctorCreateSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(default=None, max_length=50)
    specialty: str | None = Field(default=None, max_length=100)
    license_number: str | None = Field(default=None, max_length=50)
    user_id: UUID | None = None


class DoctorSchema(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    specialty: str | None = None
    license_number: str | None = None
    user_id: UUID | None = None
    is_active: bool

    @classmethod
    def from_entity(cls, doctor: Doctor) -> "DoctorSchema":
        return cls(
            id=doctor.id,
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            email=doctor.email,
            phone=doctor.phone,
            specialty=doctor.specialty,
            license_number=doctor.license_number,
            user_id=doctor.user_id,
            is_active=doctor.is_active,
        )


class PatientCreateSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(default=None, max_length=50)
    document_number: str | None = Field(default=None, max_length=50)


class PatientSchema(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    document_number: str | None = None
    is_active: bool

    @classmethod
    def from_entity(cls, patient: Patient) -> "PatientSchema":
        return cls(
            id=patient.id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
            document_number=patient.document_number,
            is_active=patient.is_active,
        )


# ============================================================================
# Plan limits
# ============================================================================


class LimitSchema(BaseModel):
    allowed: bool
    current: int | None = None
    limit: int | None = None
    remaining: int | None = None
    message: str | None = None

    @classmethod
    def from_result(cls, result: LimitCheckResult) -> "LimitSchema":
        return cls(
            allowed=result.allowed,
            current=result.current_count,
            limit=result.limit,
            remaining=result.remaining,
            message=result.message,
        )


class PlanSchema(BaseModel):
    name: str
    display_name: str
    is_fallback: bool
    subscription_status: str | None = None
    current_period_end: datetime | None = None


class PlanLimitStatusSchema(BaseModel):
    plan: PlanSchema
    doctors: LimitSchema
    patients: LimitSchema
    admins: LimitSchema

    @classmethod
    def from_status(cls, status: PlanLimitStatus) -> "PlanLimitStatusSchema":
        plan = status.plan
        return cls(
            plan=PlanSchema(
                name=plan.name,
                display_name=plan.display_name,
                is_fallback=plan.is_fallback,
                subscription_status=plan.subscription_status.value if plan.subscription_status else None,
                current_period_end=plan.current_period_end,
            ),
            doctors=LimitSchema.from_result(status.doctors),
            patients=LimitSchema.from_result(status.patients),
            admins=LimitSchema.from_result(status.admins),
        )
