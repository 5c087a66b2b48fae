"""HTTP handlers for the payment endpoints and their wiring."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from flask import jsonify, request

from payment_service.payment import Payment, PaymentStatus
from payment_service.ports import PaymentRepository, UUIDGenerator
from payment_service.requests import (
    BindError,
    ValidationError,
    parse_payment_request,
    parse_update_request,
)
from payment_service.response import Response
from payment_service.use_cases import (
    CreateUseCase,
    GetByIdUseCase,
    ProcessUseCase,
    UpdateUseCase,
)

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_ZERO_TIME_TEXT = "0001-01-01T00:00:00Z"


def _parse_id(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def _payment_body(payment: Payment) -> dict[str, Any]:
    processed_at = (
        payment.processed_at.isoformat()
        if payment.processed_at is not None
        else _ZERO_TIME_TEXT
    )
    return {
        "ID": payment.id,
        "BookingID": payment.booking_id,
        "UserID": payment.user_id,
        "Amount": payment.amount,
        "Currency": payment.currency,
        "Status": payment.status.value,
        "PaymentMethod": payment.payment_method,
        "ProcessedAt": processed_at,
        "TransactionID": payment.transaction_id,
    }


def _reply(response: Response, status_code: int):
    return jsonify(response.to_dict()), status_code


def _request_body() -> Any:
    return request.get_json(force=True, silent=True)


class CreateController:
    """Handles creation of a new pending payment."""

    def __init__(self, use_case: CreateUseCase) -> None:
        self.use_case = use_case

    def run(self):
        try:
            body = parse_payment_request(_request_body())
        except BindError as exc:
            return _reply(Response(False, "Invalid request data", error=str(exc)), 400)
        except ValidationError as exc:
            return _reply(Response(False, "Validation error", error=str(exc)), 400)

        payment = Payment(
            id=0,
            amount=body.amount,
            currency=body.currency,
            status=PaymentStatus.PENDING,
            booking_id=body.booking_id,
            user_id=body.user_id,
            payment_method=body.payment_method,
        )
        try:
            self.use_case.run(payment)
        except Exception as exc:  # any storage failure is reported to the client
            return _reply(Response(False, "Failed to create payment", error=str(exc)), 500)

        return _reply(Response(True, "Payment created successfully", error=""), 201)


class GetByIdController:
    """Handles lookup of a single payment."""

    def __init__(self, use_case: GetByIdUseCase) -> None:
        self.use_case = use_case

    def run(self, payment_id: str):
        try:
            identifier = _parse_id(payment_id)
        except ValueError as exc:
            return _reply(Response(False, "Invalid ID format", error=str(exc)), 400)

        try:
            payment = self.use_case.run(identifier)
        except Exception as exc:
            return _reply(Response(False, "Error retrieving payment", error=str(exc)), 500)

        return _reply(
            Response(True, "Payment retrieved successfully", data=_payment_body(payment)),
            200,
        )


class ProcessController:
    """Handles processing of a pending payment."""

    def __init__(self, use_case: ProcessUseCase) -> None:
        self.use_case = use_case

    def run(self, payment_id: str):
        try:
            identifier = _parse_id(payment_id)
        except ValueError as exc:
            body = {
                "status": False,
                "message": "Invalid ID format",
                "data": None,
                "error": str(exc),
            }
            return jsonify(body), 400

        try:
            self.use_case.run(identifier)
        except Exception as exc:
            logger.info("Payment %s was not processed: %s", identifier, exc)
        return "", 200


class UpdateController:
    """Handles changes to a payment's status and processing time."""

    def __init__(self, use_case: UpdateUseCase) -> None:
        self.use_case = use_case

    def run(self, payment_id: str):
        try:
            identifier = _parse_id(payment_id)
        except ValueError as exc:
            return _reply(Response(False, "Invalid ID format", error=str(exc)), 400)

        try:
            body = parse_update_request(_request_body())
        except BindError as exc:
            return _reply(Response(False, "Invalid request data", error=str(exc)), 400)
        except ValidationError as exc:
            return _reply(Response(False, "Validation error", error=str(exc)), 400)

        try:
            payment = self.use_case.run(identifier, body.status, body.process_at)
        except Exception as exc:
            return _reply(Response(False, "Error updating payment", error=str(exc)), 500)

        return _reply(
            Response(True, "Payment updated successfully", data=_payment_body(payment)),
            200,
        )


@dataclass(frozen=True)
class Controllers:
    """The set of controllers served under the payment routes."""

    create: CreateController
    get_by_id: GetByIdController
    update: UpdateController
    process: ProcessController


def build_controllers(
    repository: PaymentRepository, uuid_generator: UUIDGenerator
) -> Controllers:
    """Wire the use cases and controllers around one repository."""
    return Controllers(
        create=CreateController(CreateUseCase(repository, uuid_generator)),
        get_by_id=GetByIdController(GetByIdUseCase(repository)),
        update=UpdateController(UpdateUseCase(repository)),
        process=ProcessController(ProcessUseCase(repository)),
    )