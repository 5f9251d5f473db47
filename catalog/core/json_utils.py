"""Coercion helpers for product fields stored as (possibly repeatedly) encoded JSON.

Older product rows were written through several layers that each called
``JSON.stringify`` on an already encoded value, so a list of tags can come
back as ``'"[\\"sale\\"]"'``. Everything here unwraps such values and coerces
the result into a fixed shape. Malformed input is defaulted or dropped, never
raised.
"""
import json
import re
from typing import Any, TypeVar

T = TypeVar("T")

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def deep_parse(value: Any) -> Any:
    """Parse ``value`` as JSON until the result is no longer a string.

    Non-strings are returned unchanged and the empty string becomes ``None``.
    A string that does not parse is returned as-is, so plain-text legacy
    values pass through. ``NaN`` and ``Infinity`` are not JSON and stay text,
    as does input nested too deeply to decode. Applying this to its own
    output is a no-op.
    """
    while isinstance(value, str):
        if value == "":
            return None
        try:
            parsed = json.loads(value, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            return value
        value = parsed
    return value


def safe_json_parse(value: Any, fallback: T) -> Any | T:
    parsed = deep_parse(value)
    return parsed if parsed is not None else fallback


def parse_json_array(value: Any) -> list:
    parsed = deep_parse(value)
    return parsed if isinstance(parsed, list) else []


def parse_json_object(value: Any) -> dict:
    parsed = deep_parse(value)
    return parsed if isinstance(parsed, dict) else {}


def _slugify(text: str) -> str:
    return _SLUG_STRIP_RE.sub("-", text.lower())


def _stringify(value: Any) -> str:
    """Stringify the way the dashboard's JavaScript does (``true``, ``1``)."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _normalize_attribute_values(values: Any) -> list[dict]:
    normalized = []
    for entry in parse_json_array(values):
        entry = deep_parse(entry)
        if isinstance(entry, dict):
            normalized.append(entry)
            continue
        # Bare scalars ("S", or "42" that parsed to 42) become value records
        if isinstance(entry, bool) or not isinstance(entry, (str, int, float)):
            continue
        text = _stringify(entry).strip()
        if text:
            normalized.append({"id": text, "value": text, "slug": _slugify(text)})
    return normalized


def normalize_variation_attributes(value: Any) -> list[dict]:
    """Coerce stored variation attributes into ``{id, name, type, slug, values}`` records."""
    attributes = []
    for attr in parse_json_array(value):
        attr = deep_parse(attr)
        if not isinstance(attr, dict):
            continue
        name = attr.get("name") or ""
        if not isinstance(name, str):
            name = _stringify(name)
        attributes.append({
            "id": attr.get("id") or name,
            "name": name,
            "type": attr.get("type") or "select",
            "slug": attr.get("slug") or _slugify(name),
            "values": _normalize_attribute_values(attr.get("values")),
        })
    return attributes


def normalize_variant_options(value: Any) -> dict[str, str]:
    """Coerce a variant's attribute combination into ``{attribute name: value}``.

    Accepts the admin panel's array form
    (``[{"attributeName": "Color", "value": "Red"}]``, also keyed ``name`` or
    ``attribute``) and the plain object form (``{"Color": "Red"}``).
    """
    parsed = deep_parse(value)
    normalized: dict[str, str] = {}

    if isinstance(parsed, list):
        for item in parsed:
            if not isinstance(item, dict):
                continue
            name = item.get("attributeName") or item.get("name") or item.get("attribute")
            option = item.get("value")
            if name and option is not None:
                normalized[_stringify(name)] = _stringify(option)
        return normalized

    if isinstance(parsed, dict):
        for name, option in parsed.items():
            if option is not None:
                normalized[str(name)] = _stringify(option)
    return normalized


def normalize_product_images(value: Any) -> list[str]:
    return [
        img for img in parse_json_array(value)
        if isinstance(img, str) and img.strip()
    ]


def normalize_product_image_objects(value: Any) -> list[dict]:
    """Return ``{url, sortOrder}`` records sorted by sort order and reindexed from 0.

    Accepts the legacy ``string[]`` layout as well as ``{url, sortOrder}[]``.
    """
    images = []
    for index, img in enumerate(parse_json_array(value)):
        if isinstance(img, str) and img.strip():
            images.append({"url": img, "sortOrder": index})
        elif isinstance(img, dict) and isinstance(img.get("url"), str) and img["url"].strip():
            sort_order = img.get("sortOrder")
            if isinstance(sort_order, bool) or not isinstance(sort_order, (int, float)):
                sort_order = index
            images.append({"url": img["url"], "sortOrder": sort_order})

    images.sort(key=lambda img: img["sortOrder"])
    return [{"url": img["url"], "sortOrder": i} for i, img in enumerate(images)]


def normalize_product_tags(value: Any) -> list[str]:
    return [
        tag for tag in parse_json_array(value)
        if isinstance(tag, str) and tag.strip()
    ]


def normalize_product(record: dict) -> dict:
    """Normalize every legacy-encoded field of a stored product record.

    Returns a new dict; fields that are not known to be encoded pass through.
    """
    normalized = dict(record)
    if "variationAttributes" in record:
        normalized["variationAttributes"] = normalize_variation_attributes(
            record["variationAttributes"]
        )
    if "images" in record:
        normalized["images"] = normalize_product_image_objects(record["images"])
    if "tags" in record:
        normalized["tags"] = normalize_product_tags(record["tags"])
    if "variants" in record:
        variants = []
        for variant in parse_json_array(record["variants"]):
            variant = deep_parse(variant)
            if not isinstance(variant, dict):
                continue
            variant = dict(variant)
            variant["attributes"] = normalize_variant_options(variant.get("attributes"))
            variants.append(variant)
        normalized["variants"] = variants
    return normalized
