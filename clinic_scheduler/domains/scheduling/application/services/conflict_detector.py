"""
Conflict Detector

Answers whether a doctor already has a slot-blocking appointment
overlapping a candidate interval. Read-only: callers that act on the
answer must hold the doctor's row lock for the whole transaction.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from clinic_scheduler.domains.scheduling.application.ports import IAppointmentRepository
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.exceptions import InvalidPayloadException, TimeConflictException
from clinic_scheduler.domains.scheduling.domain.services import find_conflict
from clinic_scheduler.domains.scheduling.domain.value_objects import TimeInterval

logger = logging.getLogger(__name__)


@dataclass
class ConflictCheckResult:
    """Result of a conflict check."""

    has_conflict: bool
    conflicting_appointment: Appointment | None = None


class ConflictDetector:
    """
    Repository-backed conflict detection.

    Example:
        ```python
        detector = ConflictDetector(appointment_repository)
        result = await detector.check(tenant_id, doctor_id, start, end)
        if result.has_conflict:
            ...
        ```
    """

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def check(
        self,
        tenant_id: UUID,
        doctor_id: UUID,
        start_time: datetime,
        end_time: datetime,
        exclude_appointment_id: UUID | None = None,
    ) -> ConflictCheckResult:
        """
        Check a doctor's agenda for an interval.

        Args:
            tenant_id: Tenant owning the agenda
            doctor_id: Doctor to check
            start_time: Interval start (inclusive)
            end_time: Interval end (exclusive)
            exclude_appointment_id: Appointment ignored by the check

        Returns:
            ConflictCheckResult with the first conflicting appointment found

        Raises:
            InvalidTimeRangeException: If start_time >= end_time
            InvalidPayloadException: If tenant or doctor is missing
        """
        return await self.check_interval(
            tenant_id,
            doctor_id,
            TimeInterval(start=start_time, end=end_time),
            exclude_appointment_id,
        )

    async def check_interval(
        self,
        tenant_id: UUID,
        doctor_id: UUID,
        interval: TimeInterval,
        exclude_appointment_id: UUID | None = None,
    ) -> ConflictCheckResult:
        """Same as ``check`` for an already validated interval."""
        if tenant_id is None:
            raise InvalidPayloadException("Tenant is required", field="tenant_id")
        if doctor_id is None:
            raise InvalidPayloadException("Doctor is required", field="doctor_id")

        candidates = await self.appointment_repo.find_overlapping(
            tenant_id=tenant_id,
            doctor_id=doctor_id,
            interval=interval,
            exclude_appointment_id=exclude_appointment_id,
        )
        conflict = find_conflict(candidates, tenant_id, doctor_id, interval, exclude_appointment_id)
        if conflict is not None:
            logger.debug(f"Doctor {doctor_id} has appointment {conflict.id} overlapping {interval}")
        return ConflictCheckResult(has_conflict=conflict is not None, conflicting_appointment=conflict)

    async def ensure_available(
        self,
        tenant_id: UUID,
        doctor_id: UUID,
        interval: TimeInterval,
        exclude_appointment_id: UUID | None = None,
    ) -> None:
        """
        Raise if the interval is taken.

        Raises:
            TimeConflictException: If a blocking appointment overlaps
        """
        result = await self.check_interval(tenant_id, doctor_id, interval, exclude_appointment_id)
        if result.has_conflict:
            conflicting = result.conflicting_appointment
            raise TimeConflictException(
                doctor_id=doctor_id,
                conflicting_appointment_id=conflicting.id if conflicting else None,
            )
