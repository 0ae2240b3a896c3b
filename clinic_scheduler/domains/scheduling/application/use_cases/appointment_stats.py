"""
Appointment Stats Use Case

Aggregated figures for the dashboard: counts by status, today's and this
week's load, collected revenue and pending payments.
"""

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Callable
from uuid import UUID

from clinic_scheduler.domains.scheduling.application.dto import AppointmentFilter, AppointmentStats
from clinic_scheduler.domains.scheduling.application.ports import IAppointmentRepository
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus


@dataclass
class AppointmentStatsRequest:
    """
    Stats request.

    ``start_from``/``start_to`` narrow the status counts and money sums.
    Today and week counts always refer to the current day and week.
    """

    tenant_id: UUID
    start_from: datetime | None = None
    start_to: datetime | None = None
    doctor_id: UUID | None = None


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Start of the UTC day containing ``now`` and of the next one."""
    start = now.astimezone(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Sunday-based week containing ``now``."""
    today, _ = day_bounds(now)
    # weekday(): Monday=0 ... Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=7)


class GetAppointmentStatsUseCase:
    """Compute appointment statistics over active appointments."""

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        self.appointment_repo = appointment_repository
        self._clock = clock or (lambda: datetime.now(UTC))

    async def execute(self, request: AppointmentStatsRequest) -> AppointmentStats:
        tenant_id = request.tenant_id
        base = AppointmentFilter(
            doctor_id=request.doctor_id,
            start_from=request.start_from,
            start_to=request.start_to,
        )

        by_status = await self.appointment_repo.count_by_status(tenant_id, base)

        now = self._clock()
        today_start, today_end = day_bounds(now)
        week_start, week_end = week_bounds(now)
        today_count = await self.appointment_repo.count(
            tenant_id,
            AppointmentFilter(doctor_id=request.doctor_id, start_from=today_start, start_before=today_end),
        )
        week_count = await self.appointment_repo.count(
            tenant_id,
            AppointmentFilter(doctor_id=request.doctor_id, start_from=week_start, start_before=week_end),
        )

        revenue = await self.appointment_repo.sum_cost(tenant_id, base, is_paid=True)
        pending = await self.appointment_repo.sum_cost(
            tenant_id,
            replace(base, status=AppointmentStatus.COMPLETED),
            is_paid=False,
        )

        return AppointmentStats(
            total=sum(by_status.values()),
            scheduled=by_status.get(AppointmentStatus.SCHEDULED, 0),
            completed=by_status.get(AppointmentStatus.COMPLETED, 0),
            cancelled=by_status.get(AppointmentStatus.CANCELLED, 0),
            no_show=by_status.get(AppointmentStatus.NO_SHOW, 0),
            today_count=today_count,
            week_count=week_count,
            revenue=revenue,
            pending_payment=pending,
        )
