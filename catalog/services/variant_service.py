import logging
import math
import re
from collections.abc import Iterable, Mapping
from itertools import product
from typing import Any

from catalog.core.json_utils import normalize_variant_options
from catalog.core.pricing import (
    calculate_discount_percentage,
    generate_attribute_key,
    sanitize_price,
)
from catalog.models.dto.attribute import AttributeValue, SelectedAttribute
from catalog.models.dto.variant import (
    GeneratedVariant,
    PriceMatrixEntry,
    ProductDefaults,
    VariantAttribute,
    VariantPriceResult,
    VariationMatrix,
)

logger = logging.getLogger(__name__)

TITLE_SEPARATOR = " / "

_SKU_STRIP_RE = re.compile(r"[^a-z0-9]")

Combination = tuple[tuple[SelectedAttribute, AttributeValue], ...]


def generate_combinations(attributes: Iterable[SelectedAttribute]) -> list[Combination]:
    """Cartesian product of the attributes' values, first attribute varying slowest.

    An attribute without values empties the whole product.
    """
    attributes = list(attributes)
    if not attributes:
        return []
    pools = [[(attr, value) for value in attr.values] for attr in attributes]
    return list(product(*pools))


def _selectable(attributes: Iterable[SelectedAttribute]) -> list[SelectedAttribute]:
    return [attr for attr in attributes if attr.values]


def count_combinations(attributes: Iterable[SelectedAttribute]) -> int:
    valid = _selectable(attributes)
    if not valid:
        return 0
    return math.prod(len(attr.values) for attr in valid)


def _optional_price(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return sanitize_price(value)


def _build_variant(combination: Combination, defaults: ProductDefaults) -> GeneratedVariant:
    title = TITLE_SEPARATOR.join(f"{attr.name}: {value.value}" for attr, value in combination)
    suffix = _SKU_STRIP_RE.sub("", "-".join(value.value for _, value in combination).lower())

    return GeneratedVariant(
        title=title,
        attributes=[
            VariantAttribute(
                attribute_id=attr.id,
                attribute_name=attr.name,
                attribute_type=attr.type,
                attribute_slug=attr.slug,
                value_id=value.id,
                value=value.value,
                value_slug=value.slug,
                color_code=value.color_code,
                image=value.image,
            )
            for attr, value in combination
        ],
        price=sanitize_price(defaults.price),
        compare_price=_optional_price(defaults.compare_price),
        cost_price=_optional_price(defaults.cost_price),
        sku=f"{defaults.sku}-{suffix}" if defaults.sku else "",
        weight=_optional_price(defaults.weight),
    )


def generate_variants(
    attributes: Iterable[SelectedAttribute],
    defaults: ProductDefaults | None = None,
) -> list[GeneratedVariant]:
    """One variant per combination of the selected attribute values.

    Attributes with no selected values are skipped. Regenerating replaces any
    earlier variant list; see ``merge_variants`` to keep edits.
    """
    defaults = defaults or ProductDefaults()
    valid = _selectable(attributes)
    if not valid:
        return []

    variants = [_build_variant(combo, defaults) for combo in generate_combinations(valid)]
    logger.debug(
        "Generated %d variants from %d attributes", len(variants), len(valid),
        extra={"variant_count": len(variants), "attribute_count": len(valid)},
    )
    return variants


def variant_options(variant: GeneratedVariant | Mapping[str, Any]) -> dict[str, str]:
    """Attribute name -> value for a generated variant or a stored variant row."""
    if isinstance(variant, GeneratedVariant):
        return variant.options()
    return normalize_variant_options(variant.get("attributes"))


def merge_variants(
    existing: Iterable[GeneratedVariant | Mapping[str, Any]],
    attributes: Iterable[SelectedAttribute],
    defaults: ProductDefaults | None = None,
) -> tuple[list[GeneratedVariant | Mapping[str, Any]], list[GeneratedVariant]]:
    """Append variants for combinations that no existing variant covers.

    Existing variants are returned untouched so per-variant edits survive.
    Returns ``(merged, added)``.
    """
    existing = list(existing)
    seen = {generate_attribute_key(variant_options(v)) for v in existing}

    added = []
    for variant in generate_variants(attributes, defaults):
        key = generate_attribute_key(variant.options())
        if key in seen:
            continue
        seen.add(key)
        added.append(variant)

    logger.info(
        "Merged variants: %d existing, %d added", len(existing), len(added),
        extra={"variant_count": len(existing) + len(added), "added_count": len(added)},
    )
    return existing + added, added


def diff_available_attributes(
    selected: Iterable[SelectedAttribute],
    available: Iterable[SelectedAttribute],
) -> tuple[list[SelectedAttribute], list[SelectedAttribute]]:
    """Compare the product's selection against the catalog's attributes.

    Returns ``(new_attributes, attributes_with_new_values)``: catalog attributes
    the product does not use yet, and used attributes reduced to the catalog
    values not yet selected.
    """
    selected_by_name = {attr.name: attr for attr in selected}
    new_attributes = []
    with_new_values = []

    for attr in available:
        current = selected_by_name.get(attr.name)
        if current is None:
            if attr.values:
                new_attributes.append(attr)
            continue
        used = {value.value for value in current.values}
        fresh = [value for value in attr.values if value.value not in used]
        if fresh:
            with_new_values.append(current.model_copy(update={"values": fresh}))

    return new_attributes, with_new_values


def build_variation_matrix(
    attributes: Iterable[SelectedAttribute],
    variants: Iterable[GeneratedVariant],
    default_selections: Mapping[str, str] | None = None,
) -> VariationMatrix:
    valid = _selectable(attributes)
    if default_selections is None:
        default_selections = {attr.id: attr.values[0].id for attr in valid}
    return VariationMatrix(
        attributes=valid,
        variants=list(variants),
        default_selections=dict(default_selections),
    )


def build_price_matrix(variants: Iterable[GeneratedVariant]) -> dict[str, PriceMatrixEntry]:
    matrix = {}
    for variant in variants:
        key = generate_attribute_key(variant.options())
        matrix[key] = PriceMatrixEntry(
            price=variant.price,
            compare_price=variant.compare_price,
            variant_id=variant.id,
            inventory_quantity=variant.inventory_quantity,
            sku=variant.sku,
        )
    return matrix


def find_variant_price(
    variants: Iterable[GeneratedVariant],
    options: Mapping[str, str],
) -> VariantPriceResult | None:
    """Look up the price of the variant matching ``options`` (order-insensitive)."""
    variants = list(variants)
    key = generate_attribute_key(options)
    entry = build_price_matrix(variants).get(key)
    if entry is None:
        return None

    # the matrix keeps the last variant per key
    title = next(
        (v.title for v in reversed(variants) if generate_attribute_key(v.options()) == key),
        None,
    )
    compare_price = entry.compare_price
    is_on_sale = bool(compare_price) and compare_price > entry.price
    return VariantPriceResult(
        **entry.model_dump(),
        title=title,
        is_on_sale=is_on_sale,
        savings=compare_price - entry.price if is_on_sale else 0.0,
        discount_percentage=(
            calculate_discount_percentage(entry.price, compare_price) if is_on_sale else 0
        ),
    )
