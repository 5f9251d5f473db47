"""Tests for price sanitizing, formatting and derived figures."""
import math

import pytest

from catalog.core.pricing import (
    calculate_bulk_price,
    calculate_discount_percentage,
    calculate_price_range,
    calculate_profit_margin,
    format_price,
    generate_attribute_key,
    generate_slug,
    get_price_display,
    is_valid_price,
    is_valid_slug,
    parse_attribute_key,
    round_half_up,
    sanitize_price,
)
from catalog.models.dto.pricing import PriceData


class TestSanitizePrice:
    @pytest.mark.parametrize("value,expected", [
        (None, 0.0),
        ("", 0.0),
        (12, 12.0),
        (12.5, 12.5),
        ("12.5", 12.5),
        ("12.50 USD", 12.5),
        ("  7", 7.0),
        ("abc", 0.0),
        (-5, 0.0),
        ("-5", 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        (True, 0.0),
        ([1], 0.0),
        (10**400, 0.0),
        ("1" * 400, 0.0),
    ])
    def test_sanitize(self, value, expected):
        assert sanitize_price(value) == expected

    def test_is_valid_price(self):
        assert is_valid_price(0) is True
        assert is_valid_price(9.99) is True
        assert is_valid_price(-1) is False
        assert is_valid_price("9.99") is False
        assert is_valid_price(False) is False
        assert is_valid_price(10**400) is False


class TestFormatPrice:
    def test_none(self):
        assert format_price(None) == "0.00"

    def test_numeric_string(self):
        assert format_price("12.5") == "12.50"

    def test_rounds_to_two_decimals(self):
        assert format_price(3.14159) == "3.14"

    def test_invalid_is_zero(self):
        assert format_price("free") == "0.00"


class TestDiscountAndMargin:
    def test_discount(self):
        assert calculate_discount_percentage(80, 100) == 20

    def test_no_negative_discount(self):
        assert calculate_discount_percentage(100, 80) == 0

    def test_zero_compare_price(self):
        assert calculate_discount_percentage(50, 0) == 0

    def test_discount_rounds_half_up(self):
        # 12.5% off
        assert calculate_discount_percentage(87.5, 100) == 13

    def test_margin(self):
        assert calculate_profit_margin(100, 60) == 40

    def test_margin_guards_zero_cost_and_price(self):
        assert calculate_profit_margin(100, 0) == 0
        assert calculate_profit_margin(100, -5) == 0
        assert calculate_profit_margin(0, 10) == 0

    def test_margin_can_be_negative(self):
        assert calculate_profit_margin(50, 75) == -50

    def test_discount_accepts_numeric_strings(self):
        assert calculate_discount_percentage("80", "100") == 20
        assert calculate_discount_percentage("80", 100) == 20
        assert calculate_discount_percentage("100", "80") == 0

    def test_discount_invalid_inputs_are_zero(self):
        assert calculate_discount_percentage(None, 100) == 100
        assert calculate_discount_percentage(80, None) == 0
        assert calculate_discount_percentage(-5, 100) == 100
        assert calculate_discount_percentage(80, "free") == 0

    def test_margin_accepts_numeric_strings(self):
        assert calculate_profit_margin("120", "100") == 17
        assert calculate_profit_margin("100", 60) == 40

    def test_margin_invalid_inputs_are_zero(self):
        assert calculate_profit_margin(None, 60) == 0
        assert calculate_profit_margin(100, None) == 0
        assert calculate_profit_margin(-100, 60) == 0
        assert calculate_profit_margin(math.nan, 60) == 0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2


class TestPriceDisplay:
    def test_on_sale(self):
        display = get_price_display({"price": "80", "compare_price": 100, "cost_price": "60"})
        assert display == {
            "price": "80.00",
            "original_price": "100.00",
            "discount_percentage": 20,
            "profit_margin": 25,
            "is_on_sale": True,
            "savings": "20.00",
        }

    def test_plain_price(self):
        display = get_price_display({"price": 10})
        assert display["original_price"] is None
        assert display["is_on_sale"] is False
        assert display["savings"] is None
        assert display["profit_margin"] == 0


class TestPriceRange:
    def test_empty(self):
        result = calculate_price_range([])
        assert result["min"] == 0
        assert result["max"] == 0
        assert result["range"] == "0.00"
        assert result["has_range"] is False

    def test_single_price(self):
        result = calculate_price_range([{"price": 10}, {"price": "10.00"}])
        assert result["has_range"] is False
        assert result["range"] == "10.00"

    def test_range(self):
        result = calculate_price_range([{"price": 25}, {"price": "9.5"}, {"price": None}, {"price": 12}])
        assert result["min"] == 0
        assert result["max"] == 25
        assert result["range"] == "0.00 - 25.00"
        assert result["has_range"] is True

    def test_accepts_models(self):
        result = calculate_price_range([PriceData(price=5), PriceData(price=7.25)])
        assert result["min_formatted"] == "5.00"
        assert result["max_formatted"] == "7.25"


class TestBulkPrice:
    def test_highest_matching_rule_wins(self):
        rules = [{"min_qty": 5, "discount": 10}, {"min_qty": 10, "discount": 20}]
        assert calculate_bulk_price(100, 12, rules) == pytest.approx(80)
        assert calculate_bulk_price(100, 6, rules) == pytest.approx(90)
        assert calculate_bulk_price(100, 2, rules) == pytest.approx(100)


class TestAttributeKey:
    def test_order_independent(self):
        assert generate_attribute_key({"Size": "M", "Color": "Red"}) == "Color:Red|Size:M"
        assert generate_attribute_key({"Color": "Red", "Size": "M"}) == "Color:Red|Size:M"

    def test_parse(self):
        assert parse_attribute_key("Color:Red|Size:M") == {"Color": "Red", "Size": "M"}
        assert parse_attribute_key("Color:|:M|junk") == {}


class TestSlug:
    def test_generate_slug(self):
        assert generate_slug("  Crème Brûlée -- Special!  ") == "creme-brulee-special"
        assert generate_slug("") == ""
        assert generate_slug(None) == ""

    def test_is_valid_slug(self):
        assert is_valid_slug("summer-tee-2024") is True
        assert is_valid_slug("-bad") is False
        assert is_valid_slug("double--dash") is False
        assert is_valid_slug("Upper") is False
