"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository.

Writes are staged on the session and flushed by the unit of work at
commit, so constraint violations surface there.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clinic_scheduler.core.shared import get_repository_logger
from clinic_scheduler.domains.scheduling.application.dto import AppointmentFilter
from clinic_scheduler.domains.scheduling.application.ports import IAppointmentRepository
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.value_objects import (
    NON_BLOCKING_STATUSES,
    AppointmentStatus,
    DoctorSummary,
    PatientSummary,
    TimeInterval,
)
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import (
    AppointmentModel,
    DoctorModel,
    PatientModel,
)

logger = get_repository_logger("appointment")

WITH_PARTICIPANTS = (selectinload(AppointmentModel.patient), selectinload(AppointmentModel.doctor))


def filter_conditions(tenant_id: UUID, filters: AppointmentFilter) -> list[Any]:
    """Build WHERE conditions for an AppointmentFilter."""
    conditions: list[Any] = [AppointmentModel.tenant_id == tenant_id]
    if not filters.include_inactive:
        conditions.append(AppointmentModel.is_active.is_(True))
    if filters.doctor_id:
        conditions.append(AppointmentModel.doctor_id == filters.doctor_id)
    if filters.patient_id:
        conditions.append(AppointmentModel.patient_id == filters.patient_id)
    if filters.status:
        conditions.append(AppointmentModel.status == filters.status.value)
    if filters.start_from:
        conditions.append(AppointmentModel.start_time >= filters.start_from)
    if filters.start_to:
        conditions.append(AppointmentModel.start_time <= filters.start_to)
    if filters.start_before:
        conditions.append(AppointmentModel.start_time < filters.start_before)
    return conditions


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.

    Every query is scoped by ``tenant_id``.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_by_id(
        self,
        tenant_id: UUID,
        appointment_id: UUID,
        for_update: bool = False,
    ) -> Appointment | None:
        query = (
            select(AppointmentModel)
            .options(*WITH_PARTICIPANTS)
            .where(
                and_(
                    AppointmentModel.id == appointment_id,
                    AppointmentModel.tenant_id == tenant_id,
                )
            )
        )
        # Session keeps objects across commits; reload the row from the database
        query = query.execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()

        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return self._to_entity(model, with_participants=True) if model else None

    async def add(self, appointment: Appointment) -> Appointment:
        if appointment.id is None:
            appointment.id = uuid4()
        self.session.add(self._to_model(appointment))
        logger.debug(f"Staged appointment {appointment.id}", tenant_id=str(appointment.tenant_id))
        return appointment

    async def save(self, appointment: Appointment) -> Appointment:
        model = await self.session.get(AppointmentModel, appointment.id)
        if model is None or model.tenant_id != appointment.tenant_id:
            raise LookupError(f"Appointment {appointment.id} is not loaded in this tenant")
        self._update_model(model, appointment)
        return appointment

    async def find_overlapping(
        self,
        tenant_id: UUID,
        doctor_id: UUID,
        interval: TimeInterval,
        exclude_appointment_id: UUID | None = None,
        limit: int = 1,
    ) -> list[Appointment]:
        # Half-open ranges: back-to-back appointments do not overlap
        query = select(AppointmentModel).where(
            and_(
                AppointmentModel.tenant_id == tenant_id,
                AppointmentModel.doctor_id == doctor_id,
                AppointmentModel.is_active.is_(True),
                AppointmentModel.status.notin_([s.value for s in NON_BLOCKING_STATUSES]),
                AppointmentModel.start_time < interval.end,
                AppointmentModel.end_time > interval.start,
            )
        )
        if exclude_appointment_id:
            query = query.where(AppointmentModel.id != exclude_appointment_id)
        query = query.order_by(AppointmentModel.start_time).limit(limit)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find(self, tenant_id: UUID, filters: AppointmentFilter) -> list[Appointment]:
        order = AppointmentModel.start_time.desc() if filters.order == "desc" else AppointmentModel.start_time.asc()
        query = (
            select(AppointmentModel)
            .options(*WITH_PARTICIPANTS)
            .where(*filter_conditions(tenant_id, filters))
            .order_by(order)
        )
        query = self._paginate(query, filters)

        result = await self.session.execute(query)
        return [self._to_entity(m, with_participants=True) for m in result.scalars().all()]

    async def count(self, tenant_id: UUID, filters: AppointmentFilter) -> int:
        result = await self.session.execute(
            select(func.count(AppointmentModel.id)).where(*filter_conditions(tenant_id, filters))
        )
        return result.scalar_one()

    async def find_in_range(
        self,
        tenant_id: UUID,
        range_start: datetime,
        range_end: datetime,
        doctor_id: UUID | None = None,
        patient_id: UUID | None = None,
        include_inactive: bool = False,
    ) -> list[Appointment]:
        query = select(AppointmentModel).where(
            AppointmentModel.tenant_id == tenant_id,
            AppointmentModel.start_time < range_end,
            AppointmentModel.end_time > range_start,
        )
        if not include_inactive:
            query = query.where(AppointmentModel.is_active.is_(True))
        if doctor_id:
            query = query.where(AppointmentModel.doctor_id == doctor_id)
        if patient_id:
            query = query.where(AppointmentModel.patient_id == patient_id)
        query = query.order_by(AppointmentModel.start_time).options(*WITH_PARTICIPANTS)

        result = await self.session.execute(query)
        return [self._to_entity(m, with_participants=True) for m in result.scalars().all()]

    async def count_by_status(self, tenant_id: UUID, filters: AppointmentFilter) -> dict[AppointmentStatus, int]:
        result = await self.session.execute(
            select(AppointmentModel.status, func.count(AppointmentModel.id))
            .where(*filter_conditions(tenant_id, filters))
            .group_by(AppointmentModel.status)
        )
        return {AppointmentStatus(status): count for status, count in result.all()}

    async def sum_cost(self, tenant_id: UUID, filters: AppointmentFilter, is_paid: bool) -> Decimal:
        result = await self.session.execute(
            select(func.coalesce(func.sum(AppointmentModel.cost), 0)).where(
                *filter_conditions(tenant_id, filters),
                AppointmentModel.is_paid.is_(is_paid),
                AppointmentModel.cost.isnot(None),
            )
        )
        return Decimal(result.scalar_one())

    # Helpers

    @staticmethod
    def _paginate(query: Select, filters: AppointmentFilter) -> Select:
        if filters.offset:
            query = query.offset(filters.offset)
        if filters.limit is not None:
            query = query.limit(filters.limit)
        return query

    # Mapping methods

    def _to_entity(self, model: AppointmentModel, with_participants: bool = False) -> Appointment:
        """Convert model to entity. Participant summaries need the relationships loaded."""
        patient = model.patient if with_participants else None
        doctor = model.doctor if with_participants else None
        return Appointment(
            id=model.id,  # type: ignore[arg-type]
            tenant_id=model.tenant_id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            start_time=model.start_time,  # type: ignore[arg-type]
            end_time=model.end_time,  # type: ignore[arg-type]
            duration_minutes=model.duration_minutes,  # type: ignore[arg-type]
            status=AppointmentStatus(model.status),
            appointment_type=model.appointment_type,  # type: ignore[arg-type]
            notes=model.notes,  # type: ignore[arg-type]
            private_notes=model.private_notes,  # type: ignore[arg-type]
            cost=model.cost,  # type: ignore[arg-type]
            is_paid=bool(model.is_paid),
            is_active=bool(model.is_active),
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
            patient=self._patient_summary(patient) if patient is not None else None,
            doctor=self._doctor_summary(doctor) if doctor is not None else None,
        )

    @staticmethod
    def _patient_summary(model: PatientModel) -> PatientSummary:
        return PatientSummary(
            id=model.id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
        )

    @staticmethod
    def _doctor_summary(model: DoctorModel) -> DoctorSummary:
        return DoctorSummary(
            id=model.id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            specialty=model.specialty,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
        )

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        """Convert entity to model. ``is_paid`` always starts false."""
        return AppointmentModel(
            id=appointment.id,
            tenant_id=appointment.tenant_id,
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            duration_minutes=appointment.duration_minutes,
            status=appointment.status.value,
            appointment_type=appointment.appointment_type,
            notes=appointment.notes,
            private_notes=appointment.private_notes,
            cost=appointment.cost,
            is_paid=False,
            is_active=appointment.is_active,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    def _update_model(self, model: AppointmentModel, appointment: Appointment) -> None:
        """Update model from entity. ``is_paid`` is left to the ledger."""
        model.patient_id = appointment.patient_id  # type: ignore[assignment]
        model.doctor_id = appointment.doctor_id  # type: ignore[assignment]
        model.start_time = appointment.start_time  # type: ignore[assignment]
        model.end_time = appointment.end_time  # type: ignore[assignment]
        model.duration_minutes = appointment.duration_minutes  # type: ignore[assignment]
        model.status = appointment.status.value  # type: ignore[assignment]
        model.appointment_type = appointment.appointment_type  # type: ignore[assignment]
        model.notes = appointment.notes  # type: ignore[assignment]
        model.private_notes = appointment.private_notes  # type: ignore[assignment]
        model.cost = appointment.cost  # type: ignore[assignment]
        model.is_active = appointment.is_active  # type: ignore[assignment]
        model.updated_at = appointment.updated_at  # type: ignore[assignment]
