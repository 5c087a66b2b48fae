"""Request bodies accepted by the payment endpoints, with binding and validation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

UPDATABLE_STATUSES = ("SUCCESS", "FAILED", "CANCELED")

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)


class BindError(ValueError):
    """The body could not be decoded into the request type."""


class ValidationError(ValueError):
    """The body was decoded but breaks one or more field rules."""

    def __init__(self, struct: str, errors: list[tuple[str, str]]) -> None:
        self.errors = tuple(errors)
        message = "\n".join(
            f"Key: '{struct}.{field}' Error:Field validation for '{field}' failed on the '{tag}' tag"
            for field, tag in errors
        )
        super().__init__(message)


@dataclass(frozen=True)
class PaymentRequest:
    """Body of a create-payment request."""

    amount: float
    currency: str
    booking_id: int
    user_id: int
    payment_method: str


@dataclass(frozen=True)
class UpdateStatusRequest:
    """Body of an update-status request."""

    status: str
    process_at: datetime


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise BindError("request body must be a JSON object")
    return data


def _number(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BindError(f"cannot decode {key}: expected a number")
    return float(value)


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise BindError(f"cannot decode {key}: expected an integer")
    if not -(2**63) <= value < 2**63:
        raise BindError(f"cannot decode {key}: integer out of range")
    return value


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise BindError(f"cannot decode {key}: expected a string")
    return value


def _parse_timestamp(text: str, key: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise BindError(f"cannot decode {key}: expected an RFC 3339 timestamp")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction, zone = match.group(7), match.group(8)
    microsecond = int(fraction[1:7].ljust(6, "0")) if fraction else 0
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        if offset >= timedelta(hours=24):
            raise BindError(f"cannot decode {key}: time zone offset out of range")
        tz = timezone(sign * offset)
    try:
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError as exc:
        raise BindError(f"cannot decode {key}: {exc}") from None


def _timestamp(data: Mapping[str, Any], key: str) -> datetime:
    value = data.get(key)
    if value is None:
        return _ZERO_TIME
    if not isinstance(value, str):
        raise BindError(f"cannot decode {key}: expected a timestamp string")
    return _parse_timestamp(value, key)


def parse_payment_request(data: Any) -> PaymentRequest:
    """Bind and validate a create-payment body; every field is required."""
    body = _require_mapping(data)
    request = PaymentRequest(
        amount=_number(body, "amount"),
        currency=_string(body, "currency"),
        booking_id=_integer(body, "booking_id"),
        user_id=_integer(body, "user_id"),
        payment_method=_string(body, "payment_method"),
    )
    checks = (
        ("Amount", request.amount),
        ("Currency", request.currency),
        ("BookingID", request.booking_id),
        ("UserID", request.user_id),
        ("PaymentMethod", request.payment_method),
    )
    errors = [(field, "required") for field, value in checks if not value]
    if errors:
        raise ValidationError("PaymentRequest", errors)
    return request


def parse_update_request(data: Any) -> UpdateStatusRequest:
    """Bind and validate an update-status body."""
    body = _require_mapping(data)
    request = UpdateStatusRequest(
        status=_string(body, "status"),
        process_at=_timestamp(body, "process_at"),
    )
    errors: list[tuple[str, str]] = []
    if not request.status:
        errors.append(("Status", "required"))
    elif request.status not in UPDATABLE_STATUSES:
        errors.append(("Status", "oneof"))
    if request.process_at == _ZERO_TIME:
        errors.append(("ProcessAt", "required"))
    if errors:
        raise ValidationError("UpdateStatusRequest", errors)
    return request