"""Common schema primitives."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class APIModel(BaseModel):
    """Base API model with attribute validation enabled."""

    model_config = ConfigDict(from_attributes=True)


class RequestModel(BaseModel):
    """Base request model that trims strings and rejects unknown fields."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class TokenResponse(APIModel):
    """Return a generated token exactly once."""

    id: UUID
    token: str
    user_id: UUID


class MessageResponse(APIModel):
    """Simple message response."""

    message: str
    timestamp: datetime | None = None


class FieldError(APIModel):
    """One rejected request field."""

    field: str
    message: str


class ValidationErrorResponse(APIModel):
    """Structured validation failure body."""

    detail: str = "Validation failed"
    errors: list[FieldError]


def collect_field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Flatten pydantic error dictionaries into field errors.

    The leading location segment (``body``, ``query``, ``path``) is
    dropped so clients see plain field names.

    Parameters
    ----------
    errors : Iterable[Mapping[str, Any]]
        Raw errors from ``ValidationError.errors()``.

    Returns
    -------
    list[FieldError]
        One entry per failing field.
    """
    collected: list[FieldError] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in {"body", "query", "path", "header"}:
            location = location[1:]
        collected.append(
            FieldError(
                field=".".join(location) or "body",
                message=str(error.get("msg", "Invalid value")),
            )
        )
    return collected
