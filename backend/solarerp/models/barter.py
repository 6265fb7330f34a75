from __future__ import annotations

from ..extensions import db
from ..services.settlement_service import LineItem, compute_settlement
from ..time_utils import to_utc_z


class BarterTransaction(db.Model):
    """
    A finalized barter with one partner.

    Totals and the settlement balance are always recomputed from the lines;
    nothing derived is stored.
    """
    __tablename__ = "barter_transactions"
    __table_args__ = (
        db.Index("ix_barter_transactions_partner", "partner_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    partner_id = db.Column(db.Integer, db.ForeignKey("partners.id"), nullable=False)
    created_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    partner = db.relationship("Partner", backref=db.backref("barter_transactions", lazy=True))
    created_by = db.relationship("User")
    lines = db.relationship(
        "BarterLine",
        backref="transaction",
        order_by="BarterLine.position",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def given_items(self) -> list[LineItem]:
        return [line.to_line_item() for line in self.lines if line.direction == BarterLine.GIVEN]

    def received_items(self) -> list[LineItem]:
        return [line.to_line_item() for line in self.lines if line.direction == BarterLine.RECEIVED]

    def settlement(self):
        return compute_settlement(self.given_items(), self.received_items())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "partner_id": self.partner_id,
            "created_by_user_id": self.created_by_user_id,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "items_given": [item.to_dict() for item in self.given_items()],
            "items_received": [item.to_dict() for item in self.received_items()],
            "settlement": self.settlement().to_dict(),
        }


class BarterLine(db.Model):
    """One line of a finalized barter, in entry order within its direction."""
    __tablename__ = "barter_lines"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_barter_lines_quantity_positive"),
        db.CheckConstraint("unit_value >= 0", name="ck_barter_lines_unit_value_non_negative"),
        db.CheckConstraint("direction IN ('GIVEN', 'RECEIVED')", name="ck_barter_lines_direction"),
        {"sqlite_autoincrement": True},
    )

    GIVEN = "GIVEN"
    RECEIVED = "RECEIVED"

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey("barter_transactions.id"), nullable=False, index=True)
    direction = db.Column(db.String(16), nullable=False)
    position = db.Column(db.Integer, nullable=False)

    # Product SKU for catalog items we give; generated for free-form partner items
    identifier = db.Column(db.String(64), nullable=False)
    display_name = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_value = db.Column(db.Integer, nullable=False)

    def to_line_item(self) -> LineItem:
        return LineItem(
            identifier=self.identifier,
            display_name=self.display_name,
            quantity=self.quantity,
            unit_value=self.unit_value,
        )
