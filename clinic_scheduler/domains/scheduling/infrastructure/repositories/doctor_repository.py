"""
Doctor Repository Implementation

SQLAlchemy implementation of IDoctorRepository.
"""

from uuid import UUID, uuid4

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.core.shared import get_repository_logger
from clinic_scheduler.domains.scheduling.application.ports import IDoctorRepository
from clinic_scheduler.domains.scheduling.domain.entities import Doctor
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import DoctorModel

logger = get_repository_logger("doctor")


class SQLAlchemyDoctorRepository(IDoctorRepository):
    """SQLAlchemy implementation of doctor repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID, doctor_id: UUID, for_update: bool = False) -> Doctor | None:
        query = select(DoctorModel).where(
            and_(
                DoctorModel.id == doctor_id,
                DoctorModel.tenant_id == tenant_id,
            )
        )
        query = query.execution_options(populate_existing=True)
        if for_update:
            # Serializes check-then-write on this doctor's agenda
            query = query.with_for_update()

        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, doctor: Doctor) -> Doctor:
        if doctor.id is None:
            doctor.id = uuid4()
        self.session.add(
            DoctorModel(
                id=doctor.id,
                tenant_id=doctor.tenant_id,
                user_id=doctor.user_id,
                first_name=doctor.first_name,
                last_name=doctor.last_name,
                email=doctor.email,
                phone=doctor.phone,
                specialty=doctor.specialty,
                license_number=doctor.license_number,
                is_active=doctor.is_active,
                created_at=doctor.created_at,
                updated_at=doctor.updated_at,
            )
        )
        logger.debug(f"Staged doctor {doctor.id}", tenant_id=str(doctor.tenant_id))
        return doctor

    async def save(self, doctor: Doctor) -> Doctor:
        model = await self.session.get(DoctorModel, doctor.id)
        if model is None or model.tenant_id != doctor.tenant_id:
            raise LookupError(f"Doctor {doctor.id} is not loaded in this tenant")
        model.first_name = doctor.first_name  # type: ignore[assignment]
        model.last_name = doctor.last_name  # type: ignore[assignment]
        model.email = doctor.email  # type: ignore[assignment]
        model.phone = doctor.phone  # type: ignore[assignment]
        model.specialty = doctor.specialty  # type: ignore[assignment]
        model.license_number = doctor.license_number  # type: ignore[assignment]
        model.user_id = doctor.user_id  # type: ignore[assignment]
        model.is_active = doctor.is_active  # type: ignore[assignment]
        model.updated_at = doctor.updated_at  # type: ignore[assignment]
        return doctor

    async def count_active(self, tenant_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(DoctorModel.id)).where(
                DoctorModel.tenant_id == tenant_id,
                DoctorModel.is_active.is_(True),
            )
        )
        return result.scalar_one()

    async def exists_with_email(self, tenant_id: UUID, email: str) -> bool:
        result = await self.session.execute(
            select(func.count(DoctorModel.id)).where(
                DoctorModel.tenant_id == tenant_id,
                func.lower(DoctorModel.email) == email.lower(),
            )
        )
        return result.scalar_one() > 0

    async def exists_with_license(self, tenant_id: UUID, license_number: str) -> bool:
        result = await self.session.execute(
            select(func.count(DoctorModel.id)).where(
                DoctorModel.tenant_id == tenant_id,
                DoctorModel.license_number == license_number,
            )
        )
        return result.scalar_one() > 0

    def _to_entity(self, model: DoctorModel) -> Doctor:
        return Doctor(
            id=model.id,  # type: ignore[arg-type]
            tenant_id=model.tenant_id,  # type: ignore[arg-type]
            user_id=model.user_id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
            specialty=model.specialty,  # type: ignore[arg-type]
            license_number=model.license_number,  # type: ignore[arg-type]
            is_active=bool(model.is_active),
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
        )
