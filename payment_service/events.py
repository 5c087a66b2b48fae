"""Domain events emitted by payments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PaymentProcessed:
    """Raised when a pending payment has been processed."""

    payment_id: int
    user_id: int
    booking_id: int
    amount: float
    currency: str
    processed_at: datetime | None = None