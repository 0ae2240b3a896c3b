"""
Base Entity Classes for Domain-Driven Design

Entities are domain objects with identity and lifecycle.
They maintain their identity regardless of their attributes.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import UUID

# Type variable for entity ID (UUID in this service)
TId = TypeVar("TId")


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base class for all domain entities.

    An entity is a domain object that has a distinct identity
    that runs through time and different states.

    Type Parameters:
        TId: Type of entity identifier
    """

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID."""
        if not isinstance(other, Entity):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id) if self.id is not None else id(self)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(UTC)


@dataclass
class TenantScopedEntity(Entity[TId], Generic[TId]):
    """
    Entity owned by exactly one tenant.

    Every read and write of a tenant-scoped entity is filtered by
    ``tenant_id``; a record of another tenant behaves as missing.
    """

    tenant_id: UUID | None = field(default=None)

    def belongs_to(self, tenant_id: UUID) -> bool:
        """Check tenant ownership."""
        return self.tenant_id is not None and self.tenant_id == tenant_id


@dataclass
class SoftDeletableEntity(TenantScopedEntity[TId], Generic[TId]):
    """
    Tenant-scoped entity with soft delete support.

    Instead of physical deletion, marks entity as inactive.
    """

    is_active: bool = field(default=True)

    def soft_delete(self) -> None:
        """Mark entity as inactive."""
        self.is_active = False
        self.touch()

    def restore(self) -> None:
        """Restore a soft-deleted entity."""
        self.is_active = True
        self.touch()

    def is_valid_for(self, tenant_id: UUID) -> bool:
        """Entity can be referenced by tenant operations only while active."""
        return self.belongs_to(tenant_id) and self.is_active

