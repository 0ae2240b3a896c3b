"""
Scheduling Repositories
"""

from .appointment_repository import SQLAlchemyAppointmentRepository
from .capacity_repositories import (
    SQLAlchemySubscriptionRepository,
    SQLAlchemyTenantRepository,
    SQLAlchemyUserRepository,
)
from .doctor_repository import SQLAlchemyDoctorRepository
from .patient_repository import SQLAlchemyPatientRepository

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemyDoctorRepository",
    "SQLAlchemyPatientRepository",
    "SQLAlchemySubscriptionRepository",
    "SQLAlchemyTenantRepository",
    "SQLAlchemyUserRepository",
]
