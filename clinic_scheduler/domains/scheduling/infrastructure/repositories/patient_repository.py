"""
Patient Repository Implementation

SQLAlchemy implementation of IPatientRepository.
"""

from uuid import UUID, uuid4

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.core.shared import get_repository_logger
from clinic_scheduler.domains.scheduling.application.ports import IPatientRepository
from clinic_scheduler.domains.scheduling.domain.entities import Patient
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import PatientModel

logger = get_repository_logger("patient")


class SQLAlchemyPatientRepository(IPatientRepository):
    """SQLAlchemy implementation of patient repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID, patient_id: UUID, for_update: bool = False) -> Patient | None:
        query = select(PatientModel).where(
            and_(
                PatientModel.id == patient_id,
                PatientModel.tenant_id == tenant_id,
            )
        )
        query = query.execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()

        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, patient: Patient) -> Patient:
        if patient.id is None:
            patient.id = uuid4()
        self.session.add(
            PatientModel(
                id=patient.id,
                tenant_id=patient.tenant_id,
                first_name=patient.first_name,
                last_name=patient.last_name,
                email=patient.email,
                phone=patient.phone,
                document_number=patient.document_number,
                is_active=patient.is_active,
                created_at=patient.created_at,
                updated_at=patient.updated_at,
            )
        )
        logger.debug(f"Staged patient {patient.id}", tenant_id=str(patient.tenant_id))
        return patient

    async def save(self, patient: Patient) -> Patient:
        model = await self.session.get(PatientModel, patient.id)
        if model is None or model.tenant_id != patient.tenant_id:
            raise LookupError(f"Patient {patient.id} is not loaded in this tenant")
        model.first_name = patient.first_name  # type: ignore[assignment]
        model.last_name = patient.last_name  # type: ignore[assignment]
        model.email = patient.email  # type: ignore[assignment]
        model.phone = patient.phone  # type: ignore[assignment]
        model.document_number = patient.document_number  # type: ignore[assignment]
        model.is_active = patient.is_active  # type: ignore[assignment]
        model.updated_at = patient.updated_at  # type: ignore[assignment]
        return patient

    async def count_active(self, tenant_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(PatientModel.id)).where(
                PatientModel.tenant_id == tenant_id,
                PatientModel.is_active.is_(True),
            )
        )
        return result.scalar_one()

    def _to_entity(self, model: PatientModel) -> Patient:
        return Patient(
            id=model.id,  # type: ignore[arg-type]
            tenant_id=model.tenant_id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
            document_number=model.document_number,  # type: ignore[arg-type]
            is_active=bool(model.is_active),
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
        )
