from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class Product(db.Model):
    """
    Catalog product. All prices are integers in minor currency units.

    sell_price is the value used when the product is handed over in a barter.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_category_active", "category", "is_active"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    sku = db.Column(db.String(64), nullable=False, unique=True)
    name = db.Column(db.String(255), nullable=False)
    # factory1_chassis, factory2_cable_dc, import_solar_panel, partner_inverter, ...
    category = db.Column(db.String(64), nullable=False)
    unit = db.Column(db.String(16), nullable=False, default="piece")
    brand = db.Column(db.String(128), nullable=True)

    cost_price = db.Column(db.Integer, nullable=False, default=0)
    sell_price = db.Column(db.Integer, nullable=False)
    min_sell_price = db.Column(db.Integer, nullable=False, default=0)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "brand": self.brand,
            "cost_price": self.cost_price,
            "sell_price": self.sell_price,
            "min_sell_price": self.min_sell_price,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
        }
