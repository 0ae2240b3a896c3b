"""
Scheduling Domain Entities
"""

from .appointment import Appointment
from .doctor import Doctor
from .patient import Patient
from .subscription import Plan, Subscription

__all__ = [
    "Appointment",
    "Doctor",
    "Patient",
    "Plan",
    "Subscription",
]
