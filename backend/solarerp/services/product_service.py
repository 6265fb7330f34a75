# Overview: Service-layer operations for catalog products.

from ..extensions import db
from ..models import Product
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    ValidationError,
    enforce_rules_product,
    validate_payload,
)


PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields={
        "sku", "name", "category", "unit", "brand",
        "cost_price", "sell_price", "min_sell_price",
    },
    required_on_create={"sku", "name", "category", "sell_price"},
)


def create_product(payload: dict) -> Product:
    cleaned = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY)
    enforce_rules_product(cleaned)

    if db.session.query(Product).filter_by(sku=cleaned["sku"]).first():
        raise ValidationError(f"SKU '{cleaned['sku']}' already exists")

    product = Product(**cleaned)
    db.session.add(product)
    db.session.commit()
    return product


def list_products(category: str | None = None) -> list[Product]:
    query = db.session.query(Product).filter(Product.is_active.is_(True))
    if category:
        query = query.filter(Product.category == category)
    return query.order_by(Product.name).all()


def get_product(product_id: int) -> Product:
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")
    return product
