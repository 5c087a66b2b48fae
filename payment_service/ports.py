"""Interfaces the application layer depends on, and a UUID generator."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol, runtime_checkable

from payment_service.payment import Payment


class PaymentNotFoundError(LookupError):
    """No payment exists with the requested id."""


@runtime_checkable
class PaymentRepository(Protocol):
    """Storage for payments."""

    def create(self, payment: Payment) -> None:
        """Store a new payment and set its id."""

    def get_by_id(self, payment_id: int) -> Payment:
        """Return the payment with this id or raise PaymentNotFoundError."""

    def update(self, payment_id: int, status: str, processed_at: datetime) -> Payment:
        """Change status and processing time, returning the stored payment."""


@runtime_checkable
class UUIDGenerator(Protocol):
    """Source of unique transaction identifiers."""

    def generate_uuid(self) -> str:
        """Return a new identifier."""


class RandomUUIDGenerator:
    """Generates random version 4 UUID strings."""

    def generate_uuid(self) -> str:
        return str(uuid.uuid4())