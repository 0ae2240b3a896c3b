"""
Conflict Rules for Scheduling Domain

Pure overlap rules shared by the repository-backed conflict detector
and by anything that already holds a doctor's appointments in memory.
"""

from collections.abc import Iterable
from uuid import UUID

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import TimeInterval


def is_conflicting(
    existing: Appointment,
    tenant_id: UUID,
    doctor_id: UUID,
    interval: TimeInterval,
    exclude_appointment_id: UUID | None = None,
) -> bool:
    """
    Check whether an existing appointment blocks ``interval`` for a doctor.

    It blocks when it belongs to the same tenant and doctor, is active,
    is not CANCELLED or NO_SHOW, and ``existing.start < end and existing.end > start``.
    """
    if exclude_appointment_id is not None and existing.id == exclude_appointment_id:
        return False
    if existing.tenant_id != tenant_id or existing.doctor_id != doctor_id:
        return False
    if not existing.blocks_slot():
        return False
    return existing.interval.overlaps(interval)


def find_conflict(
    appointments: Iterable[Appointment],
    tenant_id: UUID,
    doctor_id: UUID,
    interval: TimeInterval,
    exclude_appointment_id: UUID | None = None,
) -> Appointment | None:
    """Return the first appointment that blocks ``interval``, if any."""
    for appointment in appointments:
        if is_conflicting(appointment, tenant_id, doctor_id, interval, exclude_appointment_id):
            return appointment
    return None
