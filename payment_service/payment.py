"""The payment entity and its state transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from payment_service.events import PaymentProcessed

logger = logging.getLogger(__name__)


class PaymentStatus(str, Enum):
    """Lifecycle states of a payment."""

    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELED = "CANCELED"


class PaymentStateError(Exception):
    """A transition was requested that the current status does not allow."""


@dataclass
class Payment:
    """A payment for a booking made by a user."""

    id: int = 0
    booking_id: int = 0
    user_id: int = 0
    amount: float = 0.0
    currency: str = ""
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = ""
    processed_at: datetime | None = None
    transaction_id: str = ""

    def __post_init__(self) -> None:
        self.status = PaymentStatus(self.status)

    def process(self) -> PaymentProcessed:
        """Mark a pending payment as successful and return the resulting event."""
        logger.info("Processing payment with ID: %s", self.id)
        if self.status is not PaymentStatus.PENDING:
            logger.info("Payment is not pending, current status: %s", self.status.value)
            raise PaymentStateError("only pending payments can be processed")

        self.status = PaymentStatus.SUCCESS
        self.processed_at = datetime.now()

        return PaymentProcessed(
            payment_id=self.id,
            user_id=self.user_id,
            booking_id=self.booking_id,
            amount=self.amount,
            currency=self.currency,
        )

    def refund(self) -> None:
        """Cancel a successful payment as a refund."""
        if self.status is not PaymentStatus.SUCCESS:
            raise PaymentStateError("only successful payments can be refunded")
        self.status = PaymentStatus.CANCELED

    def retry(self) -> None:
        """Put a failed payment back to pending."""
        if self.status is not PaymentStatus.FAILED:
            raise PaymentStateError("only failed payments can be retried")
        self.status = PaymentStatus.PENDING

    def cancel(self) -> None:
        """Cancel a successful payment."""
        if self.status is not PaymentStatus.SUCCESS:
            raise PaymentStateError("only successful payments can be successfully ")
        self.status = PaymentStatus.CANCELED