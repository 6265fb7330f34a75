# Overview: Flask API routes for page visibility and routing.

from flask import Blueprint, request, jsonify, g

from .. import navigation
from ..decorators import require_auth
from ..services import permission_service
from ..validation import ValidationError


navigation_bp = Blueprint("navigation", __name__, url_prefix="/api/navigation")


@navigation_bp.get("")
@require_auth
def get_navigation():
    resolver = permission_service.get_resolver()
    role = g.current_user.role
    return jsonify({
        "role": role.value,
        "pages": navigation.visible_pages(resolver, role),
        "landing_page": navigation.landing_page(resolver, role),
        "pos_only": navigation.is_pos_only(role),
    }), 200


@navigation_bp.get("/resolve")
@require_auth
def resolve_page():
    """
    Resolve the page to render for ?page=<name>.

    Returns:
        200: {"requested": str, "page": str|null, "allowed": bool}
        400: Unknown or missing page
    """
    requested = request.args.get("page", "").strip()
    if not requested:
        return jsonify({"error": "page is required"}), 400

    try:
        page = navigation.resolve_page(permission_service.get_resolver(), g.current_user.role, requested)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"requested": requested, "page": page, "allowed": page is not None}), 200
