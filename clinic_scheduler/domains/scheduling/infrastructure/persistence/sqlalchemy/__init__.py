"""
Scheduling SQLAlchemy Persistence
"""

from .models import (
    NO_OVERLAP_CONSTRAINT,
    AppointmentModel,
    DoctorModel,
    PatientModel,
    PatientPaymentModel,
    PlanModel,
    SubscriptionModel,
    TenantModel,
    UserModel,
)

__all__ = [
    "NO_OVERLAP_CONSTRAINT",
    "AppointmentModel",
    "DoctorModel",
    "PatientModel",
    "PatientPaymentModel",
    "PlanModel",
    "SubscriptionModel",
    "TenantModel",
    "UserModel",
]
