"""
Unit of Work Port

Transaction boundary shared by the repositories of one request.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IUnitOfWork(Protocol):
    """Transaction control."""

    async def commit(self) -> None:
        """
        Commit staged changes.

        Raises:
            TimeConflictException: If storage rejects an overlapping booking
        """
        ...

    async def rollback(self) -> None:
        """Discard staged changes and release locks."""
        ...
