"""
Doctor Management Use Cases

Create, soft-delete and restore doctors. Creating and restoring take a
doctor seat of the tenant's plan, so both run under the tenant lock.
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.core.shared import get_use_case_logger
from clinic_scheduler.domains.scheduling.application.dto import OperationError
from clinic_scheduler.domains.scheduling.application.ports import IDoctorRepository, IUnitOfWork
from clinic_scheduler.domains.scheduling.application.services import CapacityPolicy
from clinic_scheduler.domains.scheduling.domain.entities import Doctor
from clinic_scheduler.domains.scheduling.domain.exceptions import (
    AlreadyActiveException,
    DoctorNotFoundException,
    DuplicateEmailException,
    DuplicateLicenseException,
)
from clinic_scheduler.domains.scheduling.domain.value_objects import ResourceKind

from .base import TransactionalUseCase

logger = get_use_case_logger("manage_doctors")


@dataclass
class DoctorResponse:
    """Result of a doctor mutation."""

    success: bool
    doctor: Doctor | None = None
    error: OperationError | None = None

    @classmethod
    def ok(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(success=True, doctor=doctor)

    @classmethod
    def failed(cls, error: DomainException) -> "DoctorResponse":
        return cls(success=False, error=OperationError.from_exception(error))


@dataclass
class CreateDoctorRequest:
    tenant_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    specialty: str | None = None
    license_number: str | None = None
    user_id: UUID | None = None


@dataclass
class DoctorCommand:
    tenant_id: UUID
    doctor_id: UUID


class CreateDoctorUseCase(TransactionalUseCase):
    """
    Register a doctor.

    Fails with PLAN_LIMIT_EXCEEDED when every doctor seat is taken, and
    with DUPLICATE_EMAIL / DUPLICATE_LICENSE when another doctor of the
    tenant already uses them.
    """

    def __init__(
        self,
        doctor_repository: IDoctorRepository,
        capacity_policy: CapacityPolicy,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(unit_of_work)
        self.doctor_repo = doctor_repository
        self.capacity = capacity_policy

    async def execute(self, request: CreateDoctorRequest) -> DoctorResponse:
        log = logger.with_context(tenant_id=str(request.tenant_id))
        try:
            doctor = await self._in_transaction(lambda: self._create(request))
        except DomainException as e:
            log.warning(f"Doctor not created: {e.message}", code=e.code)
            return DoctorResponse.failed(e)

        log.info(f"Doctor created: {doctor.id}")
        return DoctorResponse.ok(doctor)

    async def _create(self, request: CreateDoctorRequest) -> Doctor:
        await self.capacity.lock_tenant(request.tenant_id)
        await self.capacity.ensure_can_add(request.tenant_id, ResourceKind.DOCTOR)

        email = request.email.strip().lower() if request.email else None
        if email and await self.doctor_repo.exists_with_email(request.tenant_id, email):
            raise DuplicateEmailException("Doctor", email)
        if request.license_number and await self.doctor_repo.exists_with_license(
            request.tenant_id, request.license_number
        ):
            raise DuplicateLicenseException(request.license_number)

        doctor = Doctor(
            tenant_id=request.tenant_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=email,
            phone=request.phone,
            specialty=request.specialty,
            license_number=request.license_number,
            user_id=request.user_id,
        )
        return await self.doctor_repo.add(doctor)


class DeleteDoctorUseCase(TransactionalUseCase):
    """Soft-delete a doctor. Existing appointments are left untouched."""

    def __init__(self, doctor_repository: IDoctorRepository, unit_of_work: IUnitOfWork):
        super().__init__(unit_of_work)
        self.doctor_repo = doctor_repository

    async def execute(self, request: DoctorCommand) -> DoctorResponse:
        try:
            doctor = await self._in_transaction(lambda: self._delete(request))
        except DomainException as e:
            logger.warning(f"Doctor {request.doctor_id} not deleted: {e.message}", code=e.code)
            return DoctorResponse.failed(e)

        logger.info(f"Doctor deleted: {doctor.id}", tenant_id=str(request.tenant_id))
        return DoctorResponse.ok(doctor)

    async def _delete(self, request: DoctorCommand) -> Doctor:
        doctor = await self.doctor_repo.get_by_id(request.tenant_id, request.doctor_id, for_update=True)
        if doctor is None:
            raise DoctorNotFoundException(request.doctor_id)
        doctor.soft_delete()
        return await self.doctor_repo.save(doctor)


class RestoreDoctorUseCase(TransactionalUseCase):
    """Reactivate a doctor if the plan still has a free doctor seat."""

    def __init__(
        self,
        doctor_repository: IDoctorRepository,
        capacity_policy: CapacityPolicy,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(unit_of_work)
        self.doctor_repo = doctor_repository
        self.capacity = capacity_policy

    async def execute(self, request: DoctorCommand) -> DoctorResponse:
        try:
            doctor = await self._in_transaction(lambda: self._restore(request))
        except DomainException as e:
            logger.warning(f"Doctor {request.doctor_id} not restored: {e.message}", code=e.code)
            return DoctorResponse.failed(e)

        logger.info(f"Doctor restored: {doctor.id}", tenant_id=str(request.tenant_id))
        return DoctorResponse.ok(doctor)

    async def _restore(self, request: DoctorCommand) -> Doctor:
        await self.capacity.lock_tenant(request.tenant_id)
        doctor = await self.doctor_repo.get_by_id(request.tenant_id, request.doctor_id, for_update=True)
        if doctor is None:
            raise DoctorNotFoundException(request.doctor_id)
        if doctor.is_active:
            raise AlreadyActiveException("Doctor")

        await self.capacity.ensure_can_add(request.tenant_id, ResourceKind.DOCTOR)
        doctor.restore()
        return await self.doctor_repo.save(doctor)
