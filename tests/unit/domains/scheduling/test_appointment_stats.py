"""
Unit tests for GetAppointmentStatsUseCase and its calendar helpers.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from clinic_scheduler.domains.scheduling.application.use_cases import AppointmentStatsRequest
from clinic_scheduler.domains.scheduling.application.use_cases.appointment_stats import day_bounds, week_bounds
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus
from tests.utils.builders import at, make_appointment
from tests.utils.fakes import FakeScheduling

# Tuesday 2026-03-10, 15:00 UTC
NOW = datetime(2026, 3, 10, 15, tzinfo=UTC)


@pytest.mark.unit
def test_day_bounds():
    assert day_bounds(NOW) == (at(0), at(0, day=11))


@pytest.mark.unit
def test_week_starts_on_sunday():
    assert week_bounds(NOW) == (at(0, day=8), at(0, day=15))


@pytest.mark.unit
def test_week_bounds_on_sunday_itself():
    sunday = datetime(2026, 3, 8, 23, 59, tzinfo=UTC)

    assert week_bounds(sunday)[0] == at(0, day=8)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_stats_over_active_appointments(tenant_id, other_tenant_id):
    """Counts, today/week load and money sums ignore deleted appointments."""
    # Arrange
    harness = FakeScheduling(clock=lambda: NOW)
    doctor_id, patient_id = uuid4(), uuid4()
    paid = make_appointment(
        tenant_id, doctor_id, patient_id, start=at(11, day=8), status=AppointmentStatus.COMPLETED, cost=100
    )
    paid.is_paid = True
    harness.store.seed(
        make_appointment(tenant_id, doctor_id, patient_id, start=at(9)),
        paid,
        make_appointment(
            tenant_id, doctor_id, patient_id, start=at(11, day=7), status=AppointmentStatus.COMPLETED, cost=50
        ),
        make_appointment(tenant_id, doctor_id, patient_id, start=at(16), status=AppointmentStatus.NO_SHOW),
        make_appointment(tenant_id, doctor_id, patient_id, start=at(12), cost=999, is_active=False),
        make_appointment(other_tenant_id, doctor_id, patient_id, start=at(9), cost=70, is_paid=True),
    )

    # Act
    stats = await harness.appointment_stats().execute(AppointmentStatsRequest(tenant_id))

    # Assert
    assert stats.total == 4
    assert stats.scheduled == 1
    assert stats.completed == 2
    assert stats.cancelled == 0
    assert stats.no_show == 1
    assert stats.today_count == 2
    assert stats.week_count == 3
    assert stats.revenue == Decimal("100")
    assert stats.pending_payment == Decimal("50")
