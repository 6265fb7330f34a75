# Overview: Service-layer operations for permission; connects users to the role table and audits denials.

"""
Permission Checking and Security Event Logging

The resolver answers yes/no. This service is the caller that turns a "no"
into a PermissionDeniedError and an audit record.

DESIGN PRINCIPLES:
- Fail closed: no user or no grant -> denied
- Log denials only: grants are not logged
- One resolver per app, built at startup and shared read-only
"""

from flask import current_app, has_app_context

from ..extensions import db
from ..models import SecurityEvent, User
from ..permissions import DEFAULT_RESOLVER, PermissionResolver, PermissionSet
from ..time_utils import utcnow


class PermissionDeniedError(Exception):
    """Raised when user lacks required capability."""
    pass


def get_resolver() -> PermissionResolver:
    """The app's resolver, or the module default outside an app context."""
    if has_app_context():
        return current_app.extensions.get("permission_resolver", DEFAULT_RESOLVER)
    return DEFAULT_RESOLVER


def log_security_event(
    user_id: int | None,
    event_type: str,
    success: bool,
    resource: str | None = None,
    action: str | None = None,
    reason: str | None = None,
    ip_address: str | None = None,
) -> SecurityEvent:
    """
    Append a security event to the audit trail.

    event_type examples:
    - LOGIN_SUCCESS
    - LOGIN_FAILED
    - LOGOUT
    - PERMISSION_DENIED
    """
    event = SecurityEvent(
        user_id=user_id,
        event_type=event_type,
        resource=resource,
        action=action,
        success=success,
        reason=reason,
        ip_address=ip_address,
        occurred_at=utcnow(),
    )

    db.session.add(event)
    db.session.commit()

    return event


def get_user_permissions(user: User | None) -> PermissionSet | None:
    """PermissionSet for the user's role, or None without a user."""
    if user is None:
        return None
    return get_resolver().get_permissions(user.role)


def user_has_permission(user: User | None, capability: str) -> bool:
    role = user.role if user is not None else None
    return get_resolver().has_permission(role, capability)


def require_permission(
    user: User | None,
    capability: str,
    resource: str | None = None,
    ip_address: str | None = None,
) -> None:
    """
    Require user to hold a capability, raise PermissionDeniedError if not.

    Usage:
        require_permission(g.current_user, "manage_barter", resource="/api/barter/transactions")
    """
    if user_has_permission(user, capability):
        return

    log_security_event(
        user_id=user.id if user is not None else None,
        event_type="PERMISSION_DENIED",
        success=False,
        resource=resource,
        action=capability,
        reason=f"Missing capability: {capability}",
        ip_address=ip_address,
    )
    current_app.logger.info(
        "Permission denied: user=%s capability=%s resource=%s",
        user.username if user is not None else None,
        capability,
        resource,
    )
    raise PermissionDeniedError(f"Permission denied: {capability}")
