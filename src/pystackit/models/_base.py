"""Base model and enum for StackIt API responses.

Every StackIt response model inherits from :class:`StackItBaseModel` which
provides:

* frozen instances, so a record held by a view cannot be mutated in place
  (use ``model_copy(update=...)``).
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used, and fails fast on anything else that does not
  match the declared type.
* A ``raw`` dict that captures the original payload.

Enums inherit from :class:`StackItEnum` which adds an ``UNKNOWN`` member and
a ``_missing_`` hook that returns ``UNKNOWN`` for values the client does not
know yet.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_timestamp(value: Any) -> datetime | None:
    """Convert an ISO-8601 string or epoch number to an aware UTC datetime.

    Naive values are assumed to be UTC, which is what the backend emits.
    Returns ``None`` when the value is ``None`` or an empty string.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = float(value)
        if ts >= _MS_THRESHOLD:
            ts /= 1000.0
        return datetime.fromtimestamp(ts, tz=UTC)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"unsupported timestamp value: {value!r}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


StackItTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""Annotated type that coerces ISO strings or epoch numbers to UTC datetimes."""


class StackItEnum(enum.StrEnum):
    """Base for StackIt string enums.

    Every subclass **must** define ``UNKNOWN``. Values the API sends that
    have no mapped member resolve to ``UNKNOWN`` instead of raising.
    """

    @classmethod
    def _missing_(cls, value: object) -> StackItEnum:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        if hasattr(cls, "UNKNOWN"):
            unknown: StackItEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class StackItBaseModel(BaseModel):
    """Base for StackIt API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``null`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Only auto-stash raw when not explicitly provided (i.e. model_validate
        # from an API dict).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


class Ack(StackItBaseModel):
    """Generic acknowledgement for write endpoints.

    The backend answers deletes and read-marks with a small
    ``{"message": ...}`` body, sometimes with nothing at all.
    """

    message: str | None = None
