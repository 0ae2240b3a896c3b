"""
Scheduling Domain Container.

Single Responsibility: Wire all scheduling domain dependencies.
Everything created here is bound to one request session.
"""

import logging
from typing import TYPE_CHECKING

from clinic_scheduler.domains.scheduling.application.services import CapacityPolicy, ConflictDetector
from clinic_scheduler.domains.scheduling.application.use_cases import (
    CheckRoleLimitUseCase,
    CountAppointmentsUseCase,
    CreateAppointmentUseCase,
    CreateDoctorUseCase,
    CreatePatientUseCase,
    DeleteAppointmentUseCase,
    DeleteDoctorUseCase,
    DeletePatientUseCase,
    GetAppointmentStatsUseCase,
    GetAppointmentUseCase,
    GetCalendarAppointmentsUseCase,
    GetDoctorAppointmentsUseCase,
    GetPatientAppointmentsUseCase,
    GetPlanLimitStatusUseCase,
    ListAppointmentsUseCase,
    MarkAppointmentDoneUseCase,
    RestoreAppointmentUseCase,
    RestoreDoctorUseCase,
    RestorePatientUseCase,
    UpdateAppointmentUseCase,
)
from clinic_scheduler.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyDoctorRepository,
    SQLAlchemyPatientRepository,
    SQLAlchemySubscriptionRepository,
    SQLAlchemyTenantRepository,
    SQLAlchemyUserRepository,
)
from clinic_scheduler.domains.scheduling.infrastructure.services import SQLAlchemyPaymentGateway
from clinic_scheduler.domains.scheduling.infrastructure.unit_of_work import SQLAlchemyUnitOfWork

if TYPE_CHECKING:
    from clinic_scheduler.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class SchedulingContainer:
    """
    Scheduling domain container.

    Single Responsibility: Create scheduling repositories, services and use cases.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize scheduling container.

        Args:
            base: BaseContainer with shared configuration
        """
        self._base = base

    # ==================== REPOSITORIES ====================

    def create_appointment_repository(self, db) -> SQLAlchemyAppointmentRepository:
        return SQLAlchemyAppointmentRepository(session=db)

    def create_doctor_repository(self, db) -> SQLAlchemyDoctorRepository:
        return SQLAlchemyDoctorRepository(session=db)

    def create_patient_repository(self, db) -> SQLAlchemyPatientRepository:
        return SQLAlchemyPatientRepository(session=db)

    def create_unit_of_work(self, db) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session=db)

    # ==================== SERVICES ====================

    def create_conflict_detector(self, db) -> ConflictDetector:
        return ConflictDetector(appointment_repository=self.create_appointment_repository(db))

    def create_capacity_policy(self, db) -> CapacityPolicy:
        return CapacityPolicy(
            subscription_repository=SQLAlchemySubscriptionRepository(session=db),
            doctor_repository=self.create_doctor_repository(db),
            patient_repository=self.create_patient_repository(db),
            user_repository=SQLAlchemyUserRepository(session=db),
            tenant_repository=SQLAlchemyTenantRepository(session=db),
            free_plan=self._base.get_free_plan(),
        )

    # ==================== APPOINTMENT USE CASES ====================

    def create_create_appointment_use_case(self, db) -> CreateAppointmentUseCase:
        return CreateAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            conflict_detector=self.create_conflict_detector(db),
            payment_gateway=SQLAlchemyPaymentGateway(session=db),
            unit_of_work=self.create_unit_of_work(db),
            payment_note=self._base.settings.AUTO_PAYMENT_NOTE,
        )

    def create_update_appointment_use_case(self, db) -> UpdateAppointmentUseCase:
        return UpdateAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            conflict_detector=self.create_conflict_detector(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_delete_appointment_use_case(self, db) -> DeleteAppointmentUseCase:
        return DeleteAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_restore_appointment_use_case(self, db) -> RestoreAppointmentUseCase:
        return RestoreAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            conflict_detector=self.create_conflict_detector(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_mark_appointment_done_use_case(self, db) -> MarkAppointmentDoneUseCase:
        return MarkAppointmentDoneUseCase(
            appointment_repository=self.create_appointment_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            conflict_detector=self.create_conflict_detector(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    # ==================== QUERY USE CASES ====================

    def create_get_appointment_use_case(self, db) -> GetAppointmentUseCase:
        return GetAppointmentUseCase(appointment_repository=self.create_appointment_repository(db))

    def create_list_appointments_use_case(self, db) -> ListAppointmentsUseCase:
        return ListAppointmentsUseCase(appointment_repository=self.create_appointment_repository(db))

    def create_count_appointments_use_case(self, db) -> CountAppointmentsUseCase:
        return CountAppointmentsUseCase(appointment_repository=self.create_appointment_repository(db))

    def create_calendar_use_case(self, db) -> GetCalendarAppointmentsUseCase:
        return GetCalendarAppointmentsUseCase(appointment_repository=self.create_appointment_repository(db))

    def create_doctor_appointments_use_case(self, db) -> GetDoctorAppointmentsUseCase:
        return GetDoctorAppointmentsUseCase(
            appointment_repository=self.create_appointment_repository(db),
            doctor_repository=self.create_doctor_repository(db),
        )

    def create_patient_appointments_use_case(self, db) -> GetPatientAppointmentsUseCase:
        return GetPatientAppointmentsUseCase(
            appointment_repository=self.create_appointment_repository(db),
            patient_repository=self.create_patient_repository(db),
        )

    def create_appointment_stats_use_case(self, db) -> GetAppointmentStatsUseCase:
        return GetAppointmentStatsUseCase(appointment_repository=self.create_appointment_repository(db))

    # ==================== DOCTORS / PATIENTS ====================

    def create_create_doctor_use_case(self, db) -> CreateDoctorUseCase:
        return CreateDoctorUseCase(
            doctor_repository=self.create_doctor_repository(db),
            capacity_policy=self.create_capacity_policy(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_delete_doctor_use_case(self, db) -> DeleteDoctorUseCase:
        return DeleteDoctorUseCase(
            doctor_repository=self.create_doctor_repository(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_restore_doctor_use_case(self, db) -> RestoreDoctorUseCase:
        return RestoreDoctorUseCase(
            doctor_repository=self.create_doctor_repository(db),
            capacity_policy=self.create_capacity_policy(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_create_patient_use_case(self, db) -> CreatePatientUseCase:
        return CreatePatientUseCase(
            patient_repository=self.create_patient_repository(db),
            capacity_policy=self.create_capacity_policy(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_delete_patient_use_case(self, db) -> DeletePatientUseCase:
        return DeletePatientUseCase(
            patient_repository=self.create_patient_repository(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    def create_restore_patient_use_case(self, db) -> RestorePatientUseCase:
        return RestorePatientUseCase(
            patient_repository=self.create_patient_repository(db),
            capacity_policy=self.create_capacity_policy(db),
            unit_of_work=self.create_unit_of_work(db),
        )

    # ==================== PLAN LIMITS ====================

    def create_plan_limit_status_use_case(self, db) -> GetPlanLimitStatusUseCase:
        return GetPlanLimitStatusUseCase(capacity_policy=self.create_capacity_policy(db))

    def create_check_role_limit_use_case(self, db) -> CheckRoleLimitUseCase:
        return CheckRoleLimitUseCase(capacity_policy=self.create_capacity_policy(db))
