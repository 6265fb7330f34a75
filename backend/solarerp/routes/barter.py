# backend/solarerp/routes/barter.py
"""
Barter settlement API routes.

Composition lives on the client; these endpoints preview a settlement or
persist a finalized one.
"""
from flask import Blueprint, request, jsonify, g, current_app

from ..extensions import db
from ..decorators import require_auth, require_permission
from ..services import barter_service
from ..validation import NotFoundError, ValidationError, coerce_int


barter_bp = Blueprint("barter", __name__, url_prefix="/api/barter")


def _item_lists(data: dict):
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")
    return barter_service.build_item_lists(data.get("given", []), data.get("received", []))


@barter_bp.route("/settlements/preview", methods=["POST"])
@require_auth
@require_permission("manage_barter")
def preview_settlement():
    """
    Compute totals and balance without saving anything.

    Request body:
    {
        "given": [{"product_id": int, "quantity": int}, ...],
        "received": [{"display_name": str, "unit_value": int, "quantity": int}, ...]
    }

    Returns:
        200: {"items_given": [...], "items_received": [...], "settlement": {...}}
        400: Invalid item
    """
    data = request.get_json(silent=True) or {}

    try:
        given, received = _item_lists(data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(barter_service.preview_settlement(given, received)), 200


@barter_bp.route("/transactions", methods=["POST"])
@require_auth
@require_permission("manage_barter")
def create_transaction():
    """
    Finalize a barter with a partner.

    Request body: preview body plus {"partner_id": int, "notes": str (optional)}

    Returns:
        201: Transaction created
        400: Invalid request
    """
    data = request.get_json(silent=True) or {}

    try:
        if not isinstance(data, dict):
            raise ValidationError("Invalid JSON payload")
        if data.get("partner_id") is None:
            raise ValidationError("partner_id is required")
        partner_id = coerce_int(data["partner_id"], "partner_id")
        given, received = _item_lists(data)

        transaction = barter_service.finalize_barter(
            partner_id=partner_id,
            given=given,
            received=received,
            created_by_user_id=g.current_user.id,
            notes=data.get("notes"),
        )
        current_app.logger.info(
            "Barter %s finalized with partner %s (balance %s)",
            transaction.id, partner_id, transaction.settlement().balance,
        )
        return jsonify(transaction.to_dict()), 201

    except ValidationError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to finalize barter")
        return jsonify({"error": "Failed to finalize barter"}), 500


@barter_bp.route("/transactions", methods=["GET"])
@require_auth
@require_permission("manage_barter")
def list_transactions():
    partner_id = request.args.get("partner_id")
    try:
        partner_id = coerce_int(partner_id, "partner_id") if partner_id else None
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    transactions = barter_service.list_barter_transactions(partner_id=partner_id)
    return jsonify({"transactions": [t.to_dict() for t in transactions]}), 200


@barter_bp.route("/transactions/<int:transaction_id>", methods=["GET"])
@require_auth
@require_permission("manage_barter")
def get_transaction(transaction_id: int):
    try:
        transaction = barter_service.get_barter_transaction(transaction_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(transaction.to_dict()), 200
