"""
Scheduling Infrastructure Services
"""

from .payment_gateway import SQLAlchemyPaymentGateway

__all__ = ["SQLAlchemyPaymentGateway"]
