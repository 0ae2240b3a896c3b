"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity, tenant ownership and soft delete
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from clinic_scheduler.core.domain.entities import (
    Entity,
    SoftDeletableEntity,
    TenantScopedEntity,
)
from clinic_scheduler.core.domain.exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from clinic_scheduler.core.domain.value_objects import (
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "TenantScopedEntity",
    "SoftDeletableEntity",
    # Value Objects
    "ValueObject",
    "Money",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InvalidOperationException",
    "DuplicateEntityException",
]
