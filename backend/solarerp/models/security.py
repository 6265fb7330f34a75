from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class SecurityEvent(db.Model):
    """
    Append-only audit trail for logins, logouts and permission denials.
    """
    __tablename__ = "security_events"
    __table_args__ = (
        db.Index("ix_security_events_user_time", "user_id", "occurred_at"),
        db.Index("ix_security_events_type", "event_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    # LOGIN_SUCCESS, LOGIN_FAILED, LOGOUT, PERMISSION_DENIED
    event_type = db.Column(db.String(64), nullable=False)
    success = db.Column(db.Boolean, nullable=False)

    resource = db.Column(db.String(255), nullable=True)
    action = db.Column(db.String(64), nullable=True)
    reason = db.Column(db.Text, nullable=True)
    ip_address = db.Column(db.String(64), nullable=True)

    occurred_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "event_type": self.event_type,
            "success": self.success,
            "resource": self.resource,
            "action": self.action,
            "reason": self.reason,
            "occurred_at": to_utc_z(self.occurred_at),
        }
