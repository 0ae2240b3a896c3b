"""
Unit tests for SQLAlchemyUnitOfWork.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.domains.scheduling.domain.exceptions import TimeConflictException
from clinic_scheduler.domains.scheduling.infrastructure.unit_of_work import (
    SQLAlchemyUnitOfWork,
    is_overlap_violation,
)


class ConstraintError(Exception):
    """Driver error carrying the violated constraint name."""

    def __init__(self, constraint_name):
        super().__init__(f"violates constraint {constraint_name}")
        self.constraint_name = constraint_name


@pytest.fixture
def mock_async_session():
    session = AsyncMock(spec=AsyncSession)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_commit(mock_async_session):
    await SQLAlchemyUnitOfWork(mock_async_session).commit()

    mock_async_session.commit.assert_awaited_once()
    mock_async_session.rollback.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_overlap_constraint_becomes_time_conflict(mock_async_session):
    mock_async_session.commit.side_effect = IntegrityError(
        "INSERT INTO appointments", {}, ConstraintError("appointments_no_overlap")
    )

    with pytest.raises(TimeConflictException) as exc_info:
        await SQLAlchemyUnitOfWork(mock_async_session).commit()

    assert exc_info.value.code == "TIME_CONFLICT"
    mock_async_session.rollback.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_other_integrity_errors_propagate(mock_async_session):
    mock_async_session.commit.side_effect = IntegrityError(
        "INSERT INTO doctors", {}, ConstraintError("doctors_tenant_id_fkey")
    )

    with pytest.raises(IntegrityError):
        await SQLAlchemyUnitOfWork(mock_async_session).commit()

    mock_async_session.rollback.assert_awaited_once()


@pytest.mark.unit
def test_overlap_detected_from_message_without_constraint_name():
    error = IntegrityError(
        "INSERT INTO appointments",
        {},
        Exception('conflicting key value violates exclusion constraint "appointments_no_overlap"'),
    )

    assert is_overlap_violation(error) is True


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_rollback(mock_async_session):
    await SQLAlchemyUnitOfWork(mock_async_session).rollback()

    mock_async_session.rollback.assert_awaited_once()
