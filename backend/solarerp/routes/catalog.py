# Overview: Flask API routes for partners and catalog products.

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..decorators import require_auth, require_permission
from ..services import partner_service, product_service
from ..validation import ValidationError


catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


@catalog_bp.get("/partners")
@require_auth
@require_permission("manage_partners")
def list_partners():
    include_inactive = request.args.get("include_inactive", "false").lower() == "true"
    partners = partner_service.list_partners(include_inactive=include_inactive)
    return jsonify({"partners": [p.to_dict() for p in partners]}), 200


@catalog_bp.post("/partners")
@require_auth
@require_permission("manage_partners")
def create_partner():
    try:
        partner = partner_service.create_partner(request.get_json(silent=True))
        return jsonify(partner.to_dict()), 201
    except ValidationError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create partner")
        return jsonify({"error": "Failed to create partner"}), 500


@catalog_bp.get("/products")
@require_auth
@require_permission("view_dashboard")
def list_products():
    products = product_service.list_products(category=request.args.get("category"))
    return jsonify({"products": [p.to_dict() for p in products]}), 200


@catalog_bp.post("/products")
@require_auth
@require_permission("manage_products")
def create_product():
    try:
        product = product_service.create_product(request.get_json(silent=True))
        return jsonify(product.to_dict()), 201
    except ValidationError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "Failed to create product"}), 500
