"""
Patient Repository Port
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from clinic_scheduler.domains.scheduling.domain.entities import Patient


@runtime_checkable
class IPatientRepository(Protocol):
    """Patient repository interface."""

    async def get_by_id(self, tenant_id: UUID, patient_id: UUID, for_update: bool = False) -> Patient | None:
        """Find patient by ID within a tenant."""
        ...

    async def add(self, patient: Patient) -> Patient:
        """Stage a new patient for insertion."""
        ...

    async def save(self, patient: Patient) -> Patient:
        """Stage changes of an existing patient."""
        ...

    async def count_active(self, tenant_id: UUID) -> int:
        """Count active patients of a tenant."""
        ...
