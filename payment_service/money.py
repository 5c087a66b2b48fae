"""Value objects describing money and payment methods."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Money:
    """An amount in a given currency."""

    amount: float
    currency: str

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("amount cannot be negative or zero")
        if self.currency == "":
            raise ValueError("currency cannot be empty")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def equals(self, other: Money) -> bool:
        """Return True when both amount and currency match."""
        return self.amount == other.amount and self.currency == other.currency


class PaymentMethodType(str, Enum):
    """Kinds of payment method."""

    CARD = "CARD"
    PAYPAL = "PAYPAL"


@dataclass(frozen=True)
class PaymentMethod:
    """A payment method together with its details."""

    typ: PaymentMethodType
    details: str