"""
Doctor Repository Port
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from clinic_scheduler.domains.scheduling.domain.entities import Doctor


@runtime_checkable
class IDoctorRepository(Protocol):
    """Doctor repository interface."""

    async def get_by_id(self, tenant_id: UUID, doctor_id: UUID, for_update: bool = False) -> Doctor | None:
        """
        Find doctor by ID within a tenant.

        Args:
            tenant_id: Owning tenant
            doctor_id: Doctor identifier
            for_update: Lock the row until the transaction ends
        """
        ...

    async def add(self, doctor: Doctor) -> Doctor:
        """Stage a new doctor for insertion."""
        ...

    async def save(self, doctor: Doctor) -> Doctor:
        """Stage changes of an existing doctor."""
        ...

    async def count_active(self, tenant_id: UUID) -> int:
        """Count active doctors of a tenant."""
        ...

    async def exists_with_email(self, tenant_id: UUID, email: str) -> bool:
        """Check if a doctor of the tenant already uses this email (case-insensitive)."""
        ...

    async def exists_with_license(self, tenant_id: UUID, license_number: str) -> bool:
        """Check if a doctor of the tenant already uses this license number."""
        ...
