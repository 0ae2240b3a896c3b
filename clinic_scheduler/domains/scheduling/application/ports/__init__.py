"""
Scheduling Domain Ports

Interfaces (ports) for the scheduling domain following Clean Architecture.
"""

from clinic_scheduler.domains.scheduling.application.ports.appointment_repository import IAppointmentRepository
from clinic_scheduler.domains.scheduling.application.ports.capacity_repositories import (
    ISubscriptionRepository,
    ITenantRepository,
    IUserRepository,
)
from clinic_scheduler.domains.scheduling.application.ports.doctor_repository import IDoctorRepository
from clinic_scheduler.domains.scheduling.application.ports.patient_repository import IPatientRepository
from clinic_scheduler.domains.scheduling.application.ports.payment_gateway import IPaymentGateway
from clinic_scheduler.domains.scheduling.application.ports.unit_of_work import IUnitOfWork

__all__ = [
    "IAppointmentRepository",
    "IDoctorRepository",
    "IPatientRepository",
    "IPaymentGateway",
    "ISubscriptionRepository",
    "ITenantRepository",
    "IUnitOfWork",
    "IUserRepository",
]
