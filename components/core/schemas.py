"""Core schemas for the application."""

import enum
import re
from typing import Any, Dict

from pydantic import BaseModel, model_validator

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# "YYYY-MM" month key, used for query parameters and record validation
MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class TransactionType(str, enum.Enum):
    """Kind of money movement; also classifies categories."""
    INCOME = "income"
    EXPENSE = "expense"


def canonical_key(key: str) -> str:
    """Canonical snake_case spelling of a record key."""
    if key.endswith("_c"):
        key = key[:-2]
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_record_keys(data: Any) -> Any:
    """
    Map legacy record shapes onto the canonical snake_case schema.

    Handles backend-suffixed keys (``amount_c``), capitalized keys (``Id``,
    ``Name``) and camelCase keys (``monthlyLimit``). A canonical key that is
    already present always wins over its legacy spelling.
    """
    if not isinstance(data, dict):
        return data
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(key, str) and canonical_key(key) == key:
            normalized[key] = value
    for key, value in data.items():
        if not isinstance(key, str):
            continue
        canonical = canonical_key(key)
        if canonical not in normalized:
            normalized[canonical] = value
    return normalized


class RecordModel(BaseModel):
    """Base for every inbound/outbound record; normalizes keys before validation."""

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return normalize_record_keys(data)


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str
    api_version: str
