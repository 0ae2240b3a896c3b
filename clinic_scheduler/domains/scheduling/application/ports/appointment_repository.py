"""
Appointment Repository Port

Interface for appointment data access following Clean Architecture.
Every method is scoped by tenant: records of other tenants are invisible.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable
from uuid import UUID

from clinic_scheduler.domains.scheduling.application.dto import AppointmentFilter
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus, TimeInterval


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    Example:
        ```python
        class SQLAlchemyAppointmentRepository(IAppointmentRepository):
            async def get_by_id(self, tenant_id, appointment_id, for_update=False):
                ...
        ```
    """

    async def get_by_id(
        self,
        tenant_id: UUID,
        appointment_id: UUID,
        for_update: bool = False,
    ) -> Appointment | None:
        """
        Find appointment by ID within a tenant.

        Args:
            tenant_id: Owning tenant
            appointment_id: Appointment identifier
            for_update: Lock the row until the transaction ends

        Returns:
            Appointment if found in this tenant, None otherwise
        """
        ...

    async def add(self, appointment: Appointment) -> Appointment:
        """
        Stage a new appointment for insertion.

        Returns:
            Appointment with its identifier assigned
        """
        ...

    async def save(self, appointment: Appointment) -> Appointment:
        """Stage changes of an existing appointment."""
        ...

    async def find_overlapping(
        self,
        tenant_id: UUID,
        doctor_id: UUID,
        interval: TimeInterval,
        exclude_appointment_id: UUID | None = None,
        limit: int = 1,
    ) -> list[Appointment]:
        """
        Find active, slot-blocking appointments of a doctor overlapping an interval.

        Args:
            tenant_id: Owning tenant
            doctor_id: Doctor whose agenda is checked
            interval: Candidate half-open interval
            exclude_appointment_id: Appointment to ignore (the one being changed)
            limit: Maximum results

        Returns:
            Overlapping appointments (empty when the slot is free)
        """
        ...

    async def find(self, tenant_id: UUID, filters: AppointmentFilter) -> list[Appointment]:
        """List appointments matching filters, ordered by start time."""
        ...

    async def count(self, tenant_id: UUID, filters: AppointmentFilter) -> int:
        """Count appointments matching filters (limit/offset ignored)."""
        ...

    async def find_in_range(
        self,
        tenant_id: UUID,
        range_start: datetime,
        range_end: datetime,
        doctor_id: UUID | None = None,
        patient_id: UUID | None = None,
        include_inactive: bool = False,
    ) -> list[Appointment]:
        """List appointments whose interval overlaps ``[range_start, range_end)``."""
        ...

    async def count_by_status(self, tenant_id: UUID, filters: AppointmentFilter) -> dict[AppointmentStatus, int]:
        """Count appointments matching filters grouped by status."""
        ...

    async def sum_cost(
        self,
        tenant_id: UUID,
        filters: AppointmentFilter,
        is_paid: bool,
    ) -> Decimal:
        """Sum the cost of matching appointments with the given paid flag."""
        ...
