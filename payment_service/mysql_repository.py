"""Payment repository backed by a MySQL connection."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from payment_service.database import connect
from payment_service.payment import Payment, PaymentStatus
from payment_service.ports import PaymentNotFoundError

logger = logging.getLogger(__name__)

_INSERT = (
    "INSERT INTO payments ("
    "id, booking_id, user_id, amount, currency, status, transaction_id, payment_method"
    ") VALUES (%s, %s, %s, %s, %s, %s, %s, %s)"
)
_SELECT = (
    "SELECT id, booking_id, user_id, amount, currency, status, transaction_id, "
    "payment_method, processed_at FROM payments WHERE id = %s"
)
_UPDATE = "UPDATE payments SET status = %s, processed_at = %s WHERE id = %s"


class MySQLPaymentRepository:
    """Stores payments in the ``payments`` table."""

    def __init__(self, connection: Any = None) -> None:
        self._connection = connection if connection is not None else connect()

    def create(self, payment: Payment) -> None:
        """Insert the payment and set its id to the generated one."""
        with self._connection.cursor() as cursor:
            cursor.execute(
                _INSERT,
                (
                    payment.id or None,
                    payment.booking_id,
                    payment.user_id,
                    payment.amount,
                    payment.currency,
                    payment.status.value,
                    payment.transaction_id,
                    payment.payment_method,
                ),
            )
            payment.id = cursor.lastrowid

    def get_by_id(self, payment_id: int) -> Payment:
        """Return the stored payment or raise PaymentNotFoundError."""
        with self._connection.cursor() as cursor:
            cursor.execute(_SELECT, (payment_id,))
            row = cursor.fetchone()
        if row is None:
            raise PaymentNotFoundError(f"no payment with id {payment_id}")
        (
            row_id,
            booking_id,
            user_id,
            amount,
            currency,
            status,
            transaction_id,
            payment_method,
            processed_at,
        ) = row
        return Payment(
            id=int(row_id),
            booking_id=int(booking_id),
            user_id=int(user_id),
            amount=float(amount),
            currency=currency,
            status=PaymentStatus(status),
            payment_method=payment_method,
            processed_at=processed_at,
            transaction_id=transaction_id,
        )

    def update(self, payment_id: int, status: str, processed_at: datetime) -> Payment:
        """Set status and processing time, then return the stored payment."""
        status_text = status.value if isinstance(status, PaymentStatus) else status
        with self._connection.cursor() as cursor:
            cursor.execute(_UPDATE, (status_text, processed_at, payment_id))
            logger.info("Rows affected: %d", cursor.rowcount)
        return self.get_by_id(payment_id)