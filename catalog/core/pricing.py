"""Price formatting and calculation helpers.

All functions accept loosely typed input (numbers, numeric strings, ``None``)
as it arrives from form state and stored rows, and sanitize it to a
non-negative float instead of raising.
"""
import math
import re
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any

_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def is_valid_price(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value >= 0
    except OverflowError:
        return False


def sanitize_price(value: Any) -> float:
    """Coerce ``value`` to a usable price; anything invalid becomes 0.

    Strings contribute their leading decimal number, so ``"12.50 USD"`` is 12.5.
    """
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if is_valid_price(value) else 0.0
    if not isinstance(value, str):
        return 0.0
    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return 0.0
    parsed = float(match.group(0))
    return parsed if is_valid_price(parsed) else 0.0


def format_price(value: Any) -> str:
    """Two-decimal string without a currency symbol."""
    return f"{sanitize_price(value):.2f}"


def calculate_discount_percentage(price: Any, compare_price: Any) -> int:
    price = sanitize_price(price)
    compare_price = sanitize_price(compare_price)
    if compare_price <= 0 or compare_price <= price:
        return 0
    return round_half_up((compare_price - price) / compare_price * 100)


def calculate_profit_margin(price: Any, cost_price: Any) -> int:
    price = sanitize_price(price)
    cost_price = sanitize_price(cost_price)
    if cost_price <= 0 or price <= 0:
        return 0
    return round_half_up((price - cost_price) / price * 100)


def get_price_display(price_data: Mapping[str, Any]) -> dict:
    price = sanitize_price(price_data.get("price"))
    compare_price = sanitize_price(price_data.get("compare_price"))
    cost_price = sanitize_price(price_data.get("cost_price"))

    return {
        "price": format_price(price),
        "original_price": format_price(compare_price) if compare_price > 0 else None,
        "discount_percentage": (
            calculate_discount_percentage(price, compare_price) if compare_price > 0 else 0
        ),
        "profit_margin": calculate_profit_margin(price, cost_price) if cost_price > 0 else 0,
        "is_on_sale": compare_price > price if compare_price > 0 else False,
        "savings": format_price(compare_price - price) if compare_price > price else None,
    }


def _variant_price(variant: Any) -> Any:
    if isinstance(variant, Mapping):
        return variant.get("price")
    return getattr(variant, "price", None)


def calculate_price_range(variants: Iterable[Any]) -> dict:
    """Summarize the min/max price across a variant set.

    Variants may be mappings or objects exposing ``price``.
    """
    prices = [sanitize_price(_variant_price(v)) for v in variants]
    if not prices:
        prices = [0.0]

    low, high = min(prices), max(prices)
    has_range = low != high
    return {
        "min": low,
        "max": high,
        "min_formatted": format_price(low),
        "max_formatted": format_price(high),
        "range": f"{format_price(low)} - {format_price(high)}" if has_range else format_price(low),
        "has_range": has_range,
    }


def calculate_bulk_price(
    base_price: float,
    quantity: int,
    bulk_rules: Iterable[Mapping[str, float]],
) -> float:
    """Apply the discount of the highest ``min_qty`` rule the quantity reaches."""
    discount = 0.0
    for rule in sorted(bulk_rules, key=lambda r: r["min_qty"], reverse=True):
        if quantity >= rule["min_qty"]:
            discount = rule["discount"]
            break
    return base_price * (1 - discount / 100)


def generate_attribute_key(options: Mapping[str, str]) -> str:
    """Build the order-independent ``name:value|name:value`` price-matrix key."""
    return "|".join(f"{name}:{value}" for name, value in sorted(options.items()))


def parse_attribute_key(key: str) -> dict[str, str]:
    options = {}
    for pair in key.split("|"):
        name, _, value = pair.partition(":")
        if name and value:
            options[name] = value
    return options


def generate_slug(title: Any) -> str:
    """Lowercase, accent-free, dash-separated slug for SEO URLs."""
    if not title or not isinstance(title, str):
        return ""
    slug = unicodedata.normalize("NFD", title.lower().strip())
    slug = "".join(ch for ch in slug if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: Any) -> bool:
    if not slug or not isinstance(slug, str):
        return False
    return bool(_SLUG_RE.match(slug))
