"""
Payment Gateway Port

Creates payment records in the payment ledger. Allocation of payments to
appointments, and therefore ``Appointment.is_paid``, belongs to the ledger.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from clinic_scheduler.core.domain import Money


@runtime_checkable
class IPaymentGateway(Protocol):
    """Payment ledger interface."""

    async def create_payment(
        self,
        tenant_id: UUID,
        patient_id: UUID,
        amount: Money,
        paid_at: datetime,
        note: str | None = None,
    ) -> UUID:
        """
        Record a patient payment.

        Returns:
            Identifier of the created payment
        """
        ...
