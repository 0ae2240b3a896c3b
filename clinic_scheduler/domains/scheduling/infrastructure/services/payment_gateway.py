"""
SQLAlchemy Payment Gateway

Records patient payments in ``patient_payments``.
"""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.core.domain import Money
from clinic_scheduler.domains.scheduling.application.ports import IPaymentGateway
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import PatientPaymentModel

logger = logging.getLogger(__name__)


class SQLAlchemyPaymentGateway(IPaymentGateway):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_payment(
        self,
        tenant_id: UUID,
        patient_id: UUID,
        amount: Money,
        paid_at: datetime,
        note: str | None = None,
    ) -> UUID:
        if not amount.is_positive():
            raise ValueError("Payment amount must be positive")

        payment_id = uuid4()
        self.session.add(
            PatientPaymentModel(
                id=payment_id,
                tenant_id=tenant_id,
                patient_id=patient_id,
                amount=amount.amount,
                currency=amount.currency,
                payment_date=paid_at,
                note=note,
            )
        )
        logger.info(f"Payment {payment_id} of {amount} staged for patient {patient_id}")
        return payment_id
