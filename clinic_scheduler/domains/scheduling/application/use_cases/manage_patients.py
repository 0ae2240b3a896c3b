"""
Patient Management Use Cases

Patients count toward the plan's patient seats; create and restore are
capacity-gated under the tenant lock.
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.core.shared import get_use_case_logger
from clinic_scheduler.domains.scheduling.application.dto import OperationError
from clinic_scheduler.domains.scheduling.application.ports import IPatientRepository, IUnitOfWork
from clinic_scheduler.domains.scheduling.application.services import CapacityPolicy
from clinic_scheduler.domains.scheduling.domain.entities import Patient
from clinic_scheduler.domains.scheduling.domain.exceptions import AlreadyActiveException, PatientNotFoundException
from clinic_scheduler.domains.scheduling.domain.value_objects import ResourceKind

from .base import TransactionalUseCase

logger = get_use_case_logger("manage_patients")


@dataclass
class PatientResponse:
    """Result of a patient mutation."""

    success: bool
    patient: Patient | None = None
    error: OperationError | None = None

    @classmethod
    def ok(cls, patient: Patient) -> "PatientResponse":
        return cls(success=True, patient=patient)

    @classmethod
    def failed(cls, error: DomainException) -> "PatientResponse":
        return cls(success=False, error=OperationError.from_exception(error))


@dataclass
class CreatePatientRequest:
    tenant_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    document_number: str | None = None


@dataclass
class PatientCommand:
    tenant_id: UUID
    patient_id: UUID


class CreatePatientUseCase(TransactionalUseCase):
    """Register a patient if the plan has a free patient seat."""

    def __init__(
        self,
        patient_repository: IPatientRepository,
        capacity_policy: CapacityPolicy,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(unit_of_work)
        self.patient_repo = patient_repository
        self.capacity = capacity_policy

    async def execute(self, request: CreatePatientRequest) -> PatientResponse:
        try:
            patient = await self._in_transaction(lambda: self._create(request))
        except DomainException as e:
            logger.warning(f"Patient not created: {e.message}", code=e.code, tenant_id=str(request.tenant_id))
            return PatientResponse.failed(e)

        logger.info(f"Patient created: {patient.id}", tenant_id=str(request.tenant_id))
        return PatientResponse.ok(patient)

    async def _create(self, request: CreatePatientRequest) -> Patient:
        await self.capacity.lock_tenant(request.tenant_id)
        await self.capacity.ensure_can_add(request.tenant_id, ResourceKind.PATIENT)

        patient = Patient(
            tenant_id=request.tenant_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email.strip().lower() if request.email else None,
            phone=request.phone,
            document_number=request.document_number,
        )
        return await self.patient_repo.add(patient)


class DeletePatientUseCase(TransactionalUseCase):
    def __init__(self, patient_repository: IPatientRepository, unit_of_work: IUnitOfWork):
        super().__init__(unit_of_work)
        self.patient_repo = patient_repository

    async def execute(self, request: PatientCommand) -> PatientResponse:
        try:
            patient = await self._in_transaction(lambda: self._delete(request))
        except DomainException as e:
            logger.warning(f"Patient {request.patient_id} not deleted: {e.message}", code=e.code)
            return PatientResponse.failed(e)

        logger.info(f"Patient deleted: {patient.id}", tenant_id=str(request.tenant_id))
        return PatientResponse.ok(patient)

    async def _delete(self, request: PatientCommand) -> Patient:
        patient = await self.patient_repo.get_by_id(request.tenant_id, request.patient_id, for_update=True)
        if patient is None:
            raise PatientNotFoundException(request.patient_id)
        patient.soft_delete()
        return await self.patient_repo.save(patient)


class RestorePatientUseCase(TransactionalUseCase):
    def __init__(
        self,
        patient_repository: IPatientRepository,
        capacity_policy: CapacityPolicy,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(unit_of_work)
        self.patient_repo = patient_repository
        self.capacity = capacity_policy

    async def execute(self, request: PatientCommand) -> PatientResponse:
        try:
            patient = await self._in_transaction(lambda: self._restore(request))
        except DomainException as e:
            logger.warning(f"Patient {request.patient_id} not restored: {e.message}", code=e.code)
            return PatientResponse.failed(e)

        logger.info(f"Patient restored: {patient.id}", tenant_id=str(request.tenant_id))
        return PatientResponse.ok(patient)

    async def _restore(self, request: PatientCommand) -> Patient:
        await self.capacity.lock_tenant(request.tenant_id)
        patient = await self.patient_repo.get_by_id(request.tenant_id, request.patient_id, for_update=True)
        if patient is None:
            raise PatientNotFoundException(request.patient_id)
        if patient.is_active:
            raise AlreadyActiveException("Patient")

        await self.capacity.ensure_can_add(request.tenant_id, ResourceKind.PATIENT)
        patient.restore()
        return await self.patient_repo.save(patient)
