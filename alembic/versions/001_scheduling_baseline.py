"""scheduling_baseline

Revision ID: 001_scheduling_baseline
Revises: None
Create Date: 2026-10-17

Creates the scheduling schema: tenants, plans, subscriptions, users,
doctors, patients, appointments and patient_payments.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_scheduling_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    ]


def _tenant_fk(name: str = "tenant_id") -> sa.Column:
    return sa.Column(name, UUID(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)


def upgrade() -> None:
    """Create scheduling tables."""

    # ==========================================================================
    # 1. Accounts and plans
    # ==========================================================================
    op.create_table(
        "tenants",
        sa.Column("id", UUID(), nullable=False, comment="Tenant identifier"),
        sa.Column("name", sa.String(255), nullable=False, comment="Clinic name"),
        sa.Column("slug", sa.String(100), nullable=False, comment="URL-friendly identifier"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_tenants_slug"),
    )
    op.create_index("ix_tenants_slug", "tenants", ["slug"])

    op.create_table(
        "plans",
        sa.Column("id", UUID(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False, comment="Plan code (e.g. 'free', 'pro')"),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("max_admins", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("max_doctors", sa.Integer(), nullable=False, server_default=sa.text("3")),
        sa.Column("max_patients", sa.Integer(), nullable=False, server_default=sa.text("15")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_plans_name"),
        sa.CheckConstraint("max_admins >= 0 AND max_doctors >= 0 AND max_patients >= 0", name="ck_plans_limits"),
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("plan_id", UUID(), sa.ForeignKey("plans.id"), nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default="ACTIVE",
            comment="ACTIVE, TRIALING, PAST_DUE, CANCELED",
        ),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", name="uq_subscriptions_tenant_id"),
    )

    op.create_table(
        "users",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default="STAFF",
            comment="OWNER, ADMIN, CLINIC_ADMIN, DOCTOR, STAFF",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_tenant_email", "users", ["tenant_id", "email"], unique=True)
    op.create_index("ix_users_tenant_role", "users", ["tenant_id", "role", "is_active"])

    # ==========================================================================
    # 2. Doctors and patients
    # ==========================================================================
    op.create_table(
        "doctors",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("user_id", UUID(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("specialty", sa.String(100), nullable=True),
        sa.Column("license_number", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_doctors_tenant_active", "doctors", ["tenant_id", "is_active"])

    op.create_table(
        "patients",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("document_number", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_patients_tenant_active", "patients", ["tenant_id", "is_active"])

    # ==========================================================================
    # 3. Appointments and payments
    # ==========================================================================
    op.create_table(
        "appointments",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("patient_id", UUID(), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("doctor_id", UUID(), sa.ForeignKey("doctors.id"), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="SCHEDULED"),
        sa.Column("appointment_type", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("private_notes", sa.Text(), nullable=True),
        sa.Column("cost", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "is_paid",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            comment="Maintained by payment allocation",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("start_time < end_time", name="ck_appointments_time_range"),
        sa.CheckConstraint("cost IS NULL OR cost >= 0", name="ck_appointments_cost"),
    )
    op.create_index("ix_appointments_doctor_start", "appointments", ["tenant_id", "doctor_id", "start_time"])
    op.create_index("ix_appointments_patient_start", "appointments", ["tenant_id", "patient_id", "start_time"])
    op.create_index("ix_appointments_tenant_start", "appointments", ["tenant_id", "start_time"])

    op.create_table(
        "patient_payments",
        sa.Column("id", UUID(), nullable=False),
        _tenant_fk(),
        sa.Column("patient_id", UUID(), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="ARS"),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_patient_payments_amount"),
    )
    op.create_index("ix_patient_payments_patient", "patient_payments", ["tenant_id", "patient_id"])


def downgrade() -> None:
    """Drop scheduling tables."""
    op.drop_table("patient_payments")
    op.drop_table("appointments")
    op.drop_table("patients")
    op.drop_table("doctors")
    op.drop_table("users")
    op.drop_table("subscriptions")
    op.drop_table("plans")
    op.drop_table("tenants")
