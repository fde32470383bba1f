# shopfront/core/validation.py
"""
Input validation helpers used by the service layer.

These mirror the rules the storefront client relies on:
  - emails only need a local@domain.tld shape (no DNS/MX lookups)
  - passwords need at least 6 characters
  - product payloads need all four fields to be present and truthy,
    so 0 and "" are rejected
  - name and description must be plain text (numbers are accepted and
    shown as text); objects, lists and booleans are rejected
"""

import math
import re
from typing import Any, Iterable, Mapping

from shopfront.core.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6

PRODUCT_FIELDS: tuple[str, ...] = ("name", "description", "price", "stock")
NUMERIC_PRODUCT_FIELDS: tuple[str, ...] = ("price", "stock")
TEXT_PRODUCT_FIELDS: tuple[str, ...] = ("name", "description")


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_RE.match(email) is not None


def is_valid_password(password: Any) -> bool:
    return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH


def is_valid_product_fields(data: Mapping[str, Any]) -> bool:
    """All product fields must be present and truthy."""
    return all(data.get(field) for field in PRODUCT_FIELDS)


def is_valid_text_fields(data: Mapping[str, Any]) -> bool:
    """Text fields that are present must hold a string or a number."""
    return all(
        isinstance(data[field], (str, int, float)) and not isinstance(data[field], bool)
        for field in TEXT_PRODUCT_FIELDS
        if field in data
    )


def is_valid_patch_fields(data: Any) -> bool:
    """
    A patch must be a non-empty mapping restricted to PRODUCT_FIELDS.
    A single unknown key rejects the whole patch.
    """
    if not isinstance(data, Mapping) or not data:
        return False
    return all(field in PRODUCT_FIELDS for field in data)


def require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def to_number(value: Any) -> int | float:
    """
    Coerce a value to a number the way a JSON client would expect.

      - bool        -> 0 / 1
      - None, ""    -> 0
      - int, float  -> unchanged
      - "10"        -> 10, "99.99" -> 99.99
      - anything else -> NaN (no error raised)
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def to_number_if_present(
    data: Mapping[str, Any],
    fields: Iterable[str] = NUMERIC_PRODUCT_FIELDS,
) -> dict[str, Any]:
    """Return a copy of `data` with the given fields coerced when present."""
    result = dict(data)
    for field in fields:
        if field in result:
            result[field] = to_number(result[field])
    return result
