"""
Use Case Base

Transaction helper shared by the mutating use cases.
"""

from typing import Awaitable, Callable, TypeVar

from clinic_scheduler.domains.scheduling.application.ports import IUnitOfWork

T = TypeVar("T")


class TransactionalUseCase:
    """
    Base class for use cases that write.

    ``_in_transaction`` runs lock, validate and write steps, then commits
    once. Any exception rolls everything back before propagating, so a
    failed operation leaves no partial state behind.
    """

    def __init__(self, unit_of_work: IUnitOfWork):
        self.uow = unit_of_work

    async def _in_transaction(self, work: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await work()
            await self.uow.commit()
            return result
        except Exception:
            await self.uow.rollback()
            raise
