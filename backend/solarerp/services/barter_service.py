# Overview: Service-layer operations for barter; turns JSON item lists into settlements and persists finalized ones.

"""
Barter Service

Composition is stateless: the client sends both item lists, the service
rebuilds them through the settlement calculator and either previews or
persists the result.

- Items we give come from our catalog and are valued at the product's
  sell price ({"product_id": int, "quantity": int}).
- Items we receive are free-form ({"display_name", "unit_value", "quantity"}).
"""

from ..extensions import db
from ..models import BarterLine, BarterTransaction
from ..time_utils import utcnow
from ..validation import NotFoundError, ValidationError, coerce_int, enforce_rules_line_item
from . import partner_service, product_service
from .settlement_service import (
    LineItem,
    add_given_item,
    add_received_item,
    compute_settlement,
    line_item_from_payload,
    reset_settlement,
)


def resolve_given_item(payload: dict) -> LineItem:
    """Catalog-backed item, or a free-form one when no product_id is given."""
    if not isinstance(payload, dict):
        raise ValidationError("Each item must be an object")
    if payload.get("product_id") is None:
        return line_item_from_payload(payload)

    product_id = coerce_int(payload["product_id"], "product_id")
    try:
        product = product_service.get_product(product_id)
    except NotFoundError:
        raise ValidationError(f"Product {product_id} not found") from None
    if not product.is_active:
        raise ValidationError(f"Product {product_id} is inactive")

    quantity = coerce_int(payload.get("quantity"), "quantity")
    enforce_rules_line_item(quantity, product.sell_price)
    return LineItem(
        identifier=product.sku,
        display_name=product.name,
        quantity=quantity,
        unit_value=product.sell_price,
    )


def build_item_lists(given_payloads, received_payloads) -> tuple[list[LineItem], list[LineItem]]:
    """
    Rebuild (given, received) from JSON arrays.

    Raises ValidationError naming the offending list and position.
    """
    for label, payloads in (("given", given_payloads), ("received", received_payloads)):
        if not isinstance(payloads, list):
            raise ValidationError(f"{label} must be a list")

    given, received = reset_settlement()

    for idx, payload in enumerate(given_payloads):
        try:
            given = add_given_item(given, resolve_given_item(payload))
        except ValidationError as e:
            raise ValidationError(f"given[{idx}]: {e}") from None

    for idx, payload in enumerate(received_payloads):
        try:
            received = add_received_item(received, line_item_from_payload(payload))
        except ValidationError as e:
            raise ValidationError(f"received[{idx}]: {e}") from None

    return given, received


def preview_settlement(given: list[LineItem], received: list[LineItem]) -> dict:
    return {
        "items_given": [item.to_dict() for item in given],
        "items_received": [item.to_dict() for item in received],
        "settlement": compute_settlement(given, received).to_dict(),
    }


def finalize_barter(
    *,
    partner_id: int,
    given: list[LineItem],
    received: list[LineItem],
    created_by_user_id: int,
    notes: str | None = None,
) -> BarterTransaction:
    """
    Persist a composed barter with its lines in entry order.

    Raises ValidationError if the partner is unknown/inactive, both lists are
    empty, or notes is not a string.
    """
    try:
        partner = partner_service.get_partner(partner_id)
    except NotFoundError:
        raise ValidationError(f"Partner {partner_id} not found") from None
    if not partner.is_active:
        raise ValidationError(f"Partner {partner_id} is inactive")

    if not given and not received:
        raise ValidationError("A barter needs at least one item")

    if notes is not None:
        if not isinstance(notes, str):
            raise ValidationError("notes must be a string")
        notes = notes.strip() or None

    transaction = BarterTransaction(
        partner_id=partner.id,
        created_by_user_id=created_by_user_id,
        notes=notes,
        created_at=utcnow(),
    )

    position = 0
    for direction, items in ((BarterLine.GIVEN, given), (BarterLine.RECEIVED, received)):
        for item in items:
            transaction.lines.append(BarterLine(
                direction=direction,
                position=position,
                identifier=item.identifier,
                display_name=item.display_name,
                quantity=item.quantity,
                unit_value=item.unit_value,
            ))
            position += 1

    db.session.add(transaction)
    db.session.commit()
    return transaction


def list_barter_transactions(partner_id: int | None = None) -> list[BarterTransaction]:
    query = db.session.query(BarterTransaction)
    if partner_id is not None:
        query = query.filter(BarterTransaction.partner_id == partner_id)
    return query.order_by(BarterTransaction.created_at.desc(), BarterTransaction.id.desc()).all()


def get_barter_transaction(transaction_id: int) -> BarterTransaction:
    transaction = db.session.get(BarterTransaction, transaction_id)
    if transaction is None:
        raise NotFoundError(f"Barter transaction {transaction_id} not found")
    return transaction
