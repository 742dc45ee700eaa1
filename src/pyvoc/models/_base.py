"""Base model and enum for Volvo On Call API responses.

Every response model inherits from :class:`VocBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so
  the field default is used.
* A ``raw`` dict that captures the original payload.

String state enums inherit from :class:`VocEnum` which adds an ``UNKNOWN``
member and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_TIMESTAMP_FORMATS = ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z")


def parse_voc_timestamp(value: Any) -> datetime | None:
    """Convert an API timestamp (``2020-01-01T10:00:00+0000``) to an aware datetime.

    Naive values are assumed to be UTC. Unparseable values become ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if not isinstance(value, str):
        return None
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


VocTimestamp = Annotated[datetime | None, BeforeValidator(parse_voc_timestamp)]
"""Annotated type that coerces API timestamp strings to aware datetimes."""


class VocEnum(enum.StrEnum):
    """Base for string state enums.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> VocEnum:
        unknown: VocEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class VocBaseModel(BaseModel):
    """Base for Volvo On Call response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicitly provided raw (kwargs construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
