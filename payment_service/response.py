"""The JSON envelope returned by every endpoint."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


@dataclass
class Response:
    """Status flag, message, and optional data or error."""

    status: bool
    message: str
    data: Any = None
    error: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict, leaving out data and error when they are None."""
        body: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.data is not None:
            body["data"] = _jsonable(self.data)
        if self.error is not None:
            body["error"] = _jsonable(self.error)
        return body