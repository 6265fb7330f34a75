# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g

from .. import navigation
from ..decorators import require_auth
from ..services import auth_service
from ..services import session_service
from ..services import permission_service


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(user) -> dict:
    resolver = permission_service.get_resolver()
    return {
        "user": user.to_dict(),
        "permissions": resolver.get_permissions(user.role).to_dict(),
        "landing_page": navigation.landing_page(resolver, user.role),
    }


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and create session token.

    Token must be included in the Authorization header for protected routes.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    username = data.get("username") or data.get("email")
    password = data.get("password")

    if not all([username, password]) or not all(isinstance(v, str) for v in (username, password)):
        return jsonify({"error": "username/email and password required"}), 400

    user = auth_service.authenticate(username, password)

    if not user:
        permission_service.log_security_event(
            user_id=None,
            event_type="LOGIN_FAILED",
            success=False,
            resource=request.path,
            reason=f"Invalid credentials for {username}",
            ip_address=request.remote_addr,
        )
        return jsonify({"error": "Invalid credentials"}), 401

    _, token = session_service.create_session(user.id)
    permission_service.log_security_event(
        user_id=user.id,
        event_type="LOGIN_SUCCESS",
        success=True,
        resource=request.path,
        ip_address=request.remote_addr,
    )

    payload = _session_payload(user)
    payload["token"] = token
    return jsonify(payload), 200


@auth_bp.post("/logout")
@require_auth
def logout_route():
    session_service.revoke_session(g.session_token)
    permission_service.log_security_event(
        user_id=g.current_user.id,
        event_type="LOGOUT",
        success=True,
        resource=request.path,
        ip_address=request.remote_addr,
    )
    return jsonify({"message": "Logged out"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify(_session_payload(g.current_user)), 200
