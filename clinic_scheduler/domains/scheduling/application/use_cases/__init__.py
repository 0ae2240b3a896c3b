"""
Scheduling Use Cases

Application layer use cases for the scheduling domain.
"""

from clinic_scheduler.domains.scheduling.application.use_cases.appointment_lifecycle import (
    AppointmentCommand,
    DeleteAppointmentUseCase,
    MarkAppointmentDoneRequest,
    MarkAppointmentDoneUseCase,
    RestoreAppointmentUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.appointment_stats import (
    AppointmentStatsRequest,
    GetAppointmentStatsUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.create_appointment import (
    CreateAppointmentRequest,
    CreateAppointmentUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.manage_doctors import (
    CreateDoctorRequest,
    CreateDoctorUseCase,
    DeleteDoctorUseCase,
    DoctorCommand,
    DoctorResponse,
    RestoreDoctorUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.manage_patients import (
    CreatePatientRequest,
    CreatePatientUseCase,
    DeletePatientUseCase,
    PatientCommand,
    PatientResponse,
    RestorePatientUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.plan_limits import (
    CheckRoleLimitRequest,
    CheckRoleLimitUseCase,
    GetPlanLimitStatusUseCase,
)
from clinic_scheduler.domains.scheduling.application.use_cases.query_appointments import (
    AppointmentListResponse,
    CalendarRequest,
    CountAppointmentsRequest,
    CountAppointmentsUseCase,
    DoctorAppointmentsRequest,
    GetAppointmentRequest,
    GetAppointmentUseCase,
    GetCalendarAppointmentsUseCase,
    GetDoctorAppointmentsUseCase,
    GetPatientAppointmentsUseCase,
    ListAppointmentsRequest,
    ListAppointmentsUseCase,
    PatientAppointmentsRequest,
)
from clinic_scheduler.domains.scheduling.application.use_cases.update_appointment import (
    UpdateAppointmentRequest,
    UpdateAppointmentUseCase,
)

__all__ = [
    # Appointment lifecycle
    "AppointmentCommand",
    "CreateAppointmentRequest",
    "CreateAppointmentUseCase",
    "DeleteAppointmentUseCase",
    "MarkAppointmentDoneRequest",
    "MarkAppointmentDoneUseCase",
    "RestoreAppointmentUseCase",
    "UpdateAppointmentRequest",
    "UpdateAppointmentUseCase",
    # Queries
    "AppointmentListResponse",
    "AppointmentStatsRequest",
    "CalendarRequest",
    "CountAppointmentsRequest",
    "CountAppointmentsUseCase",
    "DoctorAppointmentsRequest",
    "GetAppointmentRequest",
    "GetAppointmentStatsUseCase",
    "GetAppointmentUseCase",
    "GetCalendarAppointmentsUseCase",
    "GetDoctorAppointmentsUseCase",
    "GetPatientAppointmentsUseCase",
    "ListAppointmentsRequest",
    "ListAppointmentsUseCase",
    "PatientAppointmentsRequest",
    # Doctors
    "CreateDoctorRequest",
    "CreateDoctorUseCase",
    "DeleteDoctorUseCase",
    "DoctorCommand",
    "DoctorResponse",
    "RestoreDoctorUseCase",
    # Patients
    "CreatePatientRequest",
    "CreatePatientUseCase",
    "DeletePatientUseCase",
    "PatientCommand",
    "PatientResponse",
    "RestorePatientUseCase",
    # Plan limits
    "CheckRoleLimitRequest",
    "CheckRoleLimitUseCase",
    "GetPlanLimitStatusUseCase",
]
