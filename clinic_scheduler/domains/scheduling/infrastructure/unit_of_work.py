"""
SQLAlchemy Unit of Work

Commits the request session and translates the overlap exclusion
constraint into the scheduling conflict error.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.domains.scheduling.application.ports import IUnitOfWork
from clinic_scheduler.domains.scheduling.domain.exceptions import TimeConflictException
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import NO_OVERLAP_CONSTRAINT

logger = logging.getLogger(__name__)


def is_overlap_violation(error: IntegrityError) -> bool:
    """Check if an integrity error comes from ``appointments_no_overlap``."""
    constraint = getattr(getattr(error, "orig", None), "constraint_name", None)
    if constraint:
        return constraint == NO_OVERLAP_CONSTRAINT
    return NO_OVERLAP_CONSTRAINT in str(error)


class SQLAlchemyUnitOfWork(IUnitOfWork):
    """Transaction boundary over one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_overlap_violation(e):
                logger.warning("Overlapping appointment rejected by database constraint")
                raise TimeConflictException() from e
            logger.error(f"Integrity error on commit: {e}")
            raise

    async def rollback(self) -> None:
        await self.session.rollback()
