# Overview: Flask API routes for inspecting the role/capability table.

from flask import Blueprint, jsonify

from ..decorators import require_auth, require_permission
from ..permissions import ConfigurationError, Role, get_capability_definition, get_all_capability_codes
from ..services import permission_service


permissions_bp = Blueprint("permissions", __name__, url_prefix="/api/permissions")


@permissions_bp.get("/capabilities")
@require_auth
@require_permission("manage_users")
def list_capabilities():
    resolver = permission_service.get_resolver()
    capabilities = []
    for code in get_all_capability_codes():
        definition = get_capability_definition(code)
        definition["roles"] = [role.value for role in resolver.roles_with(code)]
        capabilities.append(definition)
    return jsonify({"capabilities": capabilities}), 200


@permissions_bp.get("/roles")
@require_auth
@require_permission("manage_users")
def list_roles():
    resolver = permission_service.get_resolver()
    return jsonify({
        "roles": [
            {"role": role.value, "permissions": resolver.get_permissions(role).to_dict()}
            for role in Role
        ]
    }), 200


@permissions_bp.get("/roles/<role_name>")
@require_auth
@require_permission("manage_users")
def get_role(role_name: str):
    resolver = permission_service.get_resolver()
    try:
        permission_set = resolver.get_permissions(role_name)
    except ConfigurationError:
        return jsonify({"error": f"Unknown role: {role_name}"}), 404
    return jsonify({
        "role": role_name,
        "permissions": permission_set.to_dict(),
        "granted": permission_set.granted(),
    }), 200
