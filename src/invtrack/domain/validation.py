"""Validation pipeline for product mutation payloads.

Two modes:

- strict (insert): every required field must be present, then every
  present field must pass its rule
- partial (update): only the fields present in the payload are checked

Both stop at the first violation and return a normalized copy of the
payload that is safe to hand to the store.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from invtrack.domain.exceptions import InvalidFieldValueError, MissingRequiredFieldError
from invtrack.domain.model import contract


def _text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFieldValueError(field, "must be text")
    if not value.strip():
        raise InvalidFieldValueError(field, "must not be empty")
    return value


def _non_negative_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise InvalidFieldValueError(field, "must be an integer")
    if isinstance(value, str):
        stripped = value.strip()
        digits = stripped[1:] if stripped.startswith("-") else stripped
        # int() would also take "1_000" and non-ASCII digits
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidFieldValueError(field, f"not an integer: {stripped!r}")
        value = int(stripped)
    if not isinstance(value, int):
        raise InvalidFieldValueError(field, "must be an integer")
    if value < 0:
        raise InvalidFieldValueError(field, f"must not be negative, got {value}")
    if value > contract.MAX_INTEGER:
        raise InvalidFieldValueError(field, f"too large, maximum is {contract.MAX_INTEGER}")
    return value


def _blob(field: str, value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidFieldValueError(field, "must be binary data")
    data = bytes(value)
    if not data:
        raise InvalidFieldValueError(field, "must not be empty")
    return data


# Insertion order is the order fields are checked in.
FIELD_RULES: dict[str, Callable[[str, Any], Any]] = {
    contract.NAME: _text,
    contract.PRICE: _non_negative_int,
    contract.QUANTITY: _non_negative_int,
    contract.SUPPLIER_PHONE: _text,
    contract.IMAGE: _blob,
}


def validate_for_insert(values: Mapping[str, Any]) -> dict[str, Any]:
    """Strict mode: required fields first, then per-field rules."""
    _reject_unknown(values)
    for field in contract.REQUIRED_ON_CREATE:
        if field not in values:
            raise MissingRequiredFieldError(field)
    return _apply_rules(values)


def validate_for_update(values: Mapping[str, Any]) -> dict[str, Any]:
    """Partial mode: only fields present in *values* are checked."""
    _reject_unknown(values)
    return _apply_rules(values)


def _reject_unknown(values: Mapping[str, Any]) -> None:
    for field in values:
        if field == contract.ID:
            raise InvalidFieldValueError(field, "is assigned by the store and cannot be set")
        if field not in FIELD_RULES:
            raise InvalidFieldValueError(field, "unknown column")


def _apply_rules(values: Mapping[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for field, rule in FIELD_RULES.items():
        if field in values:
            cleaned[field] = rule(field, values[field])
    return cleaned
