"""Account model returned by ``customeraccounts``."""

from __future__ import annotations

import re
from typing import Any

from pydantic import Field, field_validator

from pyvoc.models._base import VocBaseModel

_RELATION_ID_RE = re.compile(r"vehicle-account-relations/(\d+)")


def parse_relation_id(value: Any) -> int | None:
    """Extract the numeric relation id from a relation URL (or pass ints through)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _RELATION_ID_RE.search(value)
    if match:
        return int(match.group(1))
    if value.strip().isdigit():
        return int(value.strip())
    return None


class Account(VocBaseModel):
    """The authenticated customer account."""

    username: str = ""
    first_name: str = ""
    last_name: str = ""
    account_id: str = ""
    account_vehicle_relations: list[int] = Field(default_factory=list)
    """Relation ids parsed from the ``vehicle-account-relations/<id>`` URLs."""

    @field_validator("account_vehicle_relations", mode="before")
    @classmethod
    def _parse_relation_urls(cls, value: Any) -> list[int]:
        if not isinstance(value, list):
            return []
        ids = (parse_relation_id(item) for item in value)
        return [relation_id for relation_id in ids if relation_id is not None]
