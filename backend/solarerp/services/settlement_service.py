# Overview: Pure barter settlement arithmetic over given/received line items.

"""
Barter Settlement Calculator

WHY: A barter exchanges goods both ways; only the difference is settled in
money. This module computes that difference and nothing else: no storage,
no logging, no messaging.

SIGN CONVENTION (single source of truth):
    balance = total_received - total_given
    balance > 0  -> we owe the partner
    balance < 0  -> the partner owes us
    balance == 0 -> settled

Amounts are integers in minor currency units. Every list operation returns
a new list; the input list is never modified, including on failure.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..validation import (
    ValidationError,
    coerce_int,
    coerce_text,
    enforce_rules_line_item,
    enforce_rules_payload_value,
)


class SettlementDirection:
    """Who pays whom after a settlement."""
    WE_OWE = "WE_OWE"
    THEY_OWE = "THEY_OWE"
    SETTLED = "SETTLED"


@dataclass(frozen=True)
class LineItem:
    """One priced, quantified entry in a given or received list."""
    identifier: str
    display_name: str
    quantity: int
    unit_value: int

    @property
    def total(self) -> int:
        return self.quantity * self.unit_value

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "display_name": self.display_name,
            "quantity": self.quantity,
            "unit_value": self.unit_value,
            "total": self.total,
        }


@dataclass(frozen=True)
class SettlementResult:
    total_given: int
    total_received: int

    @property
    def balance(self) -> int:
        return self.total_received - self.total_given

    @property
    def direction(self) -> str:
        if self.balance > 0:
            return SettlementDirection.WE_OWE
        if self.balance < 0:
            return SettlementDirection.THEY_OWE
        return SettlementDirection.SETTLED

    @property
    def amount_due(self) -> int:
        return abs(self.balance)

    def to_dict(self) -> dict:
        return {
            "total_given": self.total_given,
            "total_received": self.total_received,
            "balance": self.balance,
            "direction": self.direction,
            "amount_due": self.amount_due,
        }


def _append(items: Sequence[LineItem], item: LineItem) -> list[LineItem]:
    if not isinstance(item, LineItem):
        raise ValidationError("item must be a LineItem")
    enforce_rules_line_item(item.quantity, item.unit_value)
    return [*items, item]


def add_given_item(items: Sequence[LineItem], item: LineItem) -> list[LineItem]:
    """Append an item we hand over. Raises ValidationError for invalid quantity/value."""
    return _append(items, item)


def add_received_item(items: Sequence[LineItem], item: LineItem) -> list[LineItem]:
    """Append an item the partner hands over. Same contract as add_given_item."""
    return _append(items, item)


def remove_item(items: Sequence[LineItem], index: int) -> list[LineItem]:
    """Remove exactly one item by position. Negative indexes are out of bounds."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexError("index must be an integer")
    if index < 0 or index >= len(items):
        raise IndexError(f"index {index} out of range for {len(items)} item(s)")
    return [item for pos, item in enumerate(items) if pos != index]


def sum_totals(items: Iterable[LineItem]) -> int:
    return sum(item.total for item in items)


def compute_settlement(
    given: Sequence[LineItem],
    received: Sequence[LineItem],
) -> SettlementResult:
    return SettlementResult(
        total_given=sum_totals(given),
        total_received=sum_totals(received),
    )


def reset_settlement() -> tuple[list[LineItem], list[LineItem]]:
    """Fresh (given, received) lists once a settlement has been finalized."""
    return [], []


def generate_identifier() -> str:
    """Identifier for free-form items that are not in our catalog."""
    return secrets.token_hex(5)


def line_item_from_payload(payload: dict) -> LineItem:
    """
    Build a LineItem from JSON input.

    Expected shape:
    {
        "identifier": str (optional, generated when absent),
        "display_name": str,
        "quantity": int,
        "unit_value": int
    }
    """
    if not isinstance(payload, dict):
        raise ValidationError("Each item must be an object")

    identifier = payload.get("identifier")
    if identifier is None or str(identifier).strip() == "":
        identifier = generate_identifier()

    item = LineItem(
        identifier=coerce_text(identifier, "identifier", 64),
        display_name=coerce_text(payload.get("display_name"), "display_name", 255),
        quantity=coerce_int(payload.get("quantity"), "quantity"),
        unit_value=coerce_int(payload.get("unit_value"), "unit_value"),
    )
    enforce_rules_line_item(item.quantity, item.unit_value)
    enforce_rules_payload_value(item.unit_value)
    return item
