"""
Strict input coercion and payload validation.
"""

import pytest

from solarerp.models import Partner, Product
from solarerp.services.partner_service import PARTNER_POLICY
from solarerp.services.product_service import PRODUCT_POLICY
from solarerp.validation import (
    MAX_UNIT_VALUE,
    ValidationError,
    coerce_int,
    coerce_text,
    enforce_rules_line_item,
    enforce_rules_payload_value,
    enforce_rules_product,
    validate_payload,
)


class TestCoerceInt:

    @pytest.mark.parametrize("raw,expected", [(5, 5), ("12", 12), (" 7 ", 7), (-3, -3), ("0", 0)])
    def test_accepts_integers(self, raw, expected):
        assert coerce_int(raw, "quantity") == expected

    @pytest.mark.parametrize("raw", [True, False, 1.0, "1.5", "1e3", "1E3", "", "abc", None, [1]])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(ValidationError, match="quantity"):
            coerce_int(raw, "quantity")


class TestCoerceText:

    def test_strips(self):
        assert coerce_text("  Panel ", "name") == "Panel"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_rejects_missing(self, raw):
        with pytest.raises(ValidationError):
            coerce_text(raw, "name")

    def test_max_length(self):
        with pytest.raises(ValidationError, match="max length"):
            coerce_text("x" * 11, "name", 10)


class TestLineItemRules:

    def test_boundaries(self):
        enforce_rules_line_item(1, 0)
        enforce_rules_line_item(1, MAX_UNIT_VALUE)
        enforce_rules_line_item(1, MAX_UNIT_VALUE * 10)

    @pytest.mark.parametrize("quantity,unit_value", [
        (0, 1),
        (-1, 1),
        (1, -1),
        (1.0, 1),
        (1, 2.5),
        (True, 1),
    ])
    def test_rejects(self, quantity, unit_value):
        with pytest.raises(ValidationError):
            enforce_rules_line_item(quantity, unit_value)

    def test_payload_ceiling(self):
        enforce_rules_payload_value(MAX_UNIT_VALUE)
        with pytest.raises(ValidationError, match="cannot exceed"):
            enforce_rules_payload_value(MAX_UNIT_VALUE + 1)


class TestValidatePayload:

    def test_unknown_field_rejected(self, app):
        with pytest.raises(ValidationError, match="Field not allowed: is_active"):
            validate_payload(model=Partner, payload={"name": "X", "is_active": False}, policy=PARTNER_POLICY)

    def test_missing_required(self, app):
        with pytest.raises(ValidationError, match="Missing required fields: name"):
            validate_payload(model=Partner, payload={"email": "a@b.c"}, policy=PARTNER_POLICY)

    def test_blank_optional_becomes_none(self, app):
        cleaned = validate_payload(model=Partner, payload={"name": " Acme ", "phone": "  "}, policy=PARTNER_POLICY)
        assert cleaned == {"name": "Acme", "phone": None}

    def test_integer_columns_are_strict(self, app):
        payload = {"sku": "A", "name": "A", "category": "c", "sell_price": "10.5"}
        with pytest.raises(ValidationError, match="sell_price"):
            validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY)

    def test_non_object_payload(self, app):
        with pytest.raises(ValidationError, match="Invalid JSON payload"):
            validate_payload(model=Partner, payload=["name"], policy=PARTNER_POLICY)


class TestProductRules:

    def test_floor_above_sell_price(self):
        with pytest.raises(ValidationError, match="min_sell_price"):
            enforce_rules_product({"sell_price": 100, "min_sell_price": 101})

    def test_negative_price(self):
        with pytest.raises(ValidationError, match="cost_price"):
            enforce_rules_product({"cost_price": -1})

    def test_valid(self):
        enforce_rules_product({"cost_price": 50, "sell_price": 100, "min_sell_price": 100})
