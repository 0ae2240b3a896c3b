# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Tablas del motor de turnos. Toda fila (salvo planes) pertenece
#              a un tenant y se filtra siempre por tenant_id.
# Tenant-Aware: Yes - tenant_id en cada tabla operativa.
# ============================================================================
"""
Scheduling SQLAlchemy Models

Database models for scheduling persistence.

The ``appointments_no_overlap`` exclusion constraint is declared on the
appointments table and created by an alembic migration (which also enables
btree_gist). It rejects two active, slot-blocking appointments
of the same doctor whose ``[start_time, end_time)`` ranges overlap.
"""

import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
    literal_column,
    text,
)
from sqlalchemy.dialects.postgresql import UUID, ExcludeConstraint
from sqlalchemy.orm import relationship

from clinic_scheduler.models.db.base import Base, TimestampMixin

NO_OVERLAP_CONSTRAINT = "appointments_no_overlap"


class TenantModel(Base, TimestampMixin):
    """Clinic account. Its row is the lock taken by capacity-gated writes."""

    __tablename__ = "tenants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, comment="Tenant identifier")
    name = Column(String(255), nullable=False, comment="Clinic name")
    slug = Column(String(100), unique=True, nullable=False, index=True, comment="URL-friendly identifier")
    is_active = Column(Boolean, default=True, nullable=False)


class PlanModel(Base, TimestampMixin):
    """Subscription tier with its seat limits."""

    __tablename__ = "plans"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(50), unique=True, nullable=False, comment="Plan code (e.g. 'free', 'pro')")
    display_name = Column(String(100), nullable=False)
    max_admins = Column(Integer, nullable=False, default=1)
    max_doctors = Column(Integer, nullable=False, default=3)
    max_patients = Column(Integer, nullable=False, default=15)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("max_admins >= 0 AND max_doctors >= 0 AND max_patients >= 0", name="ck_plans_limits"),
    )


class SubscriptionModel(Base, TimestampMixin):
    """Tenant subscription, maintained by billing."""

    __tablename__ = "subscriptions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(
        UUID(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        comment="One subscription per tenant",
    )
    plan_id = Column(UUID(as_uuid=True), ForeignKey("plans.id"), nullable=False)
    status = Column(String(20), nullable=False, default="ACTIVE", comment="ACTIVE, TRIALING, PAST_DUE, CANCELED")
    current_period_end = Column(DateTime(timezone=True), nullable=True)

    plan = relationship("PlanModel")


class UserModel(Base, TimestampMixin):
    """Staff user of a clinic, counted for admin and doctor seats."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    email = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="STAFF", comment="OWNER, ADMIN, CLINIC_ADMIN, DOCTOR, STAFF")
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index("ix_users_tenant_email", "tenant_id", "email", unique=True),
        Index("ix_users_tenant_role", "tenant_id", "role", "is_active"),
    )


class DoctorModel(Base, TimestampMixin):
    """Practitioner. Locked FOR UPDATE while its agenda is checked and written."""

    __tablename__ = "doctors"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    specialty = Column(String(100), nullable=True)
    license_number = Column(String(50), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_doctors_tenant_active", "tenant_id", "is_active"),)


class PatientModel(Base, TimestampMixin):
    __tablename__ = "patients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    document_number = Column(String(50), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_patients_tenant_active", "tenant_id", "is_active"),)


class AppointmentModel(Base, TimestampMixin):
    """Booked interval of a doctor for a patient."""

    __tablename__ = "appointments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(UUID(as_uuid=True), ForeignKey("doctors.id"), nullable=False)

    # Scheduling
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="SCHEDULED")

    # Details
    appointment_type = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    private_notes = Column(Text, nullable=True)

    # Billing
    cost = Column(Numeric(12, 2), nullable=True)
    is_paid = Column(Boolean, default=False, nullable=False, comment="Maintained by payment allocation")

    is_active = Column(Boolean, default=True, nullable=False)

    # Read side; loaded explicitly by the repository
    patient = relationship("PatientModel", lazy="raise", viewonly=True)
    doctor = relationship("DoctorModel", lazy="raise", viewonly=True)

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_appointments_time_range"),
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_appointments_cost"),
        Index("ix_appointments_doctor_start", "tenant_id", "doctor_id", "start_time"),
        Index("ix_appointments_patient_start", "tenant_id", "patient_id", "start_time"),
        Index("ix_appointments_tenant_start", "tenant_id", "start_time"),
    )


AppointmentModel.__table__.append_constraint(
    ExcludeConstraint(
        (AppointmentModel.__table__.c.tenant_id, "="),
        (AppointmentModel.__table__.c.doctor_id, "="),
        (
            func.tstzrange(
                AppointmentModel.__table__.c.start_time,
                AppointmentModel.__table__.c.end_time,
                literal_column("'[)'"),
            ),
            "&&",
        ),
        name=NO_OVERLAP_CONSTRAINT,
        using="gist",
        where=text("is_active AND status NOT IN ('CANCELLED', 'NO_SHOW')"),
    )
)


class PatientPaymentModel(Base, TimestampMixin):
    """Payment received from a patient. Allocation to appointments happens elsewhere."""

    __tablename__ = "patient_payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="ARS")
    payment_date = Column(DateTime(timezone=True), nullable=False)
    note = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_patient_payments_amount"),
        Index("ix_patient_payments_patient", "tenant_id", "patient_id"),
    )
