from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta


# Maximum unit value: 9,999,999.99 in minor currency units (piasters)
MAX_UNIT_VALUE = 999_999_999


class ValidationError(ValueError):
    """400-level input problem. Callers re-prompt; nothing was changed."""


class NotFoundError(LookupError):
    """404-level missing record."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    What clients may set on a model:
    - writable_fields: fields accepted from JSON (security boundary)
    - required_on_create: fields that must be present on POST
    """
    writable_fields: set[str]
    required_on_create: set[str] = frozenset()


def coerce_int(value: Any, field_name: str) -> int:
    """
    Strict integer coercion for JSON input.

    Accepts ints and plain digit strings. Rejects bools, floats, decimal
    strings and scientific notation so money never passes through a float.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field_name} must be an integer")
        if "e" in stripped.lower():
            raise ValidationError(f"{field_name} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{field_name} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{field_name} must be an integer") from None
    if isinstance(value, float):
        raise ValidationError(f"{field_name} must be an integer, not a decimal")
    raise ValidationError(f"{field_name} must be an integer")


def coerce_text(value: Any, field_name: str, max_length: int | None = None) -> str:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field_name} cannot be blank")
    if max_length and len(text) > max_length:
        raise ValidationError(f"{field_name} exceeds max length {max_length}")
    return text


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    return {c.key: c for c in model.__mapper__.columns}


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict | None,
    policy: ModelValidationPolicy,
) -> dict:
    """
    Validate a create payload against the model's columns and a policy.

    Returns a cleaned dict with only writable fields, integers coerced
    strictly and strings stripped and length-checked.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    missing = sorted(f for f in policy.required_on_create if f not in payload)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)
    cleaned: dict = {}

    for key, raw in payload.items():
        if key not in policy.writable_fields or key not in cols:
            raise ValidationError(f"Field not allowed: {key}")
        col = cols[key]

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{key} cannot be null")
            cleaned[key] = None
            continue

        if isinstance(col.type, Integer):
            cleaned[key] = coerce_int(raw, key)
        elif isinstance(col.type, Boolean):
            if not isinstance(raw, bool):
                raise ValidationError(f"{key} must be a boolean")
            cleaned[key] = raw
        elif isinstance(col.type, (String, Text)):
            length = col.type.length if isinstance(col.type, String) else None
            if col.nullable and str(raw).strip() == "":
                cleaned[key] = None
            else:
                cleaned[key] = coerce_text(raw, key, length)
        else:
            cleaned[key] = raw

    return cleaned


def enforce_rules_line_item(quantity: Any, unit_value: Any) -> None:
    """Quantity must be a positive integer, unit value a non-negative integer."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity must be an integer")
    if quantity <= 0:
        raise ValidationError("quantity must be > 0")

    if isinstance(unit_value, bool) or not isinstance(unit_value, int):
        raise ValidationError("unit_value must be an integer amount in minor units")
    if unit_value < 0:
        raise ValidationError("unit_value must be >= 0")


def enforce_rules_payload_value(unit_value: int) -> None:
    """Ceiling for amounts entered over the API; the calculator itself has none."""
    if unit_value > MAX_UNIT_VALUE:
        raise ValidationError(f"unit_value cannot exceed {MAX_UNIT_VALUE}")


def enforce_rules_product(cleaned: dict) -> None:
    """Price rules not captured by column metadata."""
    for key in ("cost_price", "sell_price", "min_sell_price"):
        price = cleaned.get(key)
        if price is None:
            continue
        if price < 0:
            raise ValidationError(f"{key} must be >= 0")
        if price > MAX_UNIT_VALUE:
            raise ValidationError(f"{key} cannot exceed {MAX_UNIT_VALUE}")

    sell = cleaned.get("sell_price")
    floor = cleaned.get("min_sell_price")
    if sell is not None and floor is not None and floor > sell:
        raise ValidationError("min_sell_price cannot exceed sell_price")
