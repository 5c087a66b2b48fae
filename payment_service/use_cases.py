"""Application use cases that drive payments through the repository."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime

from payment_service.events import PaymentProcessed
from payment_service.payment import Payment
from payment_service.ports import PaymentRepository, UUIDGenerator

logger = logging.getLogger(__name__)


class CreateUseCase:
    """Stores a new payment under a freshly generated transaction id."""

    def __init__(self, repository: PaymentRepository, uuid_generator: UUIDGenerator) -> None:
        self.repository = repository
        self.uuid_generator = uuid_generator

    def run(self, payment: Payment) -> Payment:
        """Create the payment; the caller's object is left untouched."""
        new_payment = dataclasses.replace(
            payment, transaction_id=self.uuid_generator.generate_uuid()
        )
        self.repository.create(new_payment)
        return new_payment


class GetByIdUseCase:
    """Looks up a single payment."""

    def __init__(self, repository: PaymentRepository) -> None:
        self.repository = repository

    def run(self, payment_id: int) -> Payment:
        """Return the payment with this id."""
        return self.repository.get_by_id(payment_id)


class ProcessUseCase:
    """Processes a pending payment and persists its new state."""

    def __init__(self, repository: PaymentRepository) -> None:
        self.repository = repository

    def run(self, payment_id: int) -> PaymentProcessed:
        """Process the payment and return the event it produced."""
        logger.info("Processing payment with ID: %s", payment_id)

        payment = self.repository.get_by_id(payment_id)
        event = payment.process()
        logger.info("Payment event processed: %s", event)

        updated = self.repository.update(
            payment.id, payment.status.value, payment.processed_at
        )

        logger.info("Payment processed successfully: %s", event)
        logger.info("Updated payment: %s", updated)
        return event


class UpdateUseCase:
    """Sets the status and processing time of a payment."""

    def __init__(self, repository: PaymentRepository) -> None:
        self.repository = repository

    def run(self, payment_id: int, status: str, processed_at: datetime) -> Payment:
        """Update the payment and return it as stored."""
        return self.repository.update(payment_id, status, processed_at)