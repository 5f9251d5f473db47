from typing import Any

from pydantic import Field

from catalog.models.dto.attribute import SelectedAttribute
from catalog.models.dto.common import CamelModel


class ProductDefaults(CamelModel):
    price: float | str | None = None
    compare_price: float | str | None = None
    cost_price: float | str | None = None
    sku: str = ""
    weight: float | str | None = None


class VariantAttribute(CamelModel):
    attribute_id: str
    attribute_name: str
    attribute_type: str = ""
    attribute_slug: str = ""
    value_id: str
    value: str
    value_slug: str = ""
    color_code: str | None = None
    image: str | None = None


class GeneratedVariant(CamelModel):
    id: str | None = None
    title: str
    attributes: list[VariantAttribute] = []
    price: float = Field(default=0.0, ge=0)
    compare_price: float | None = Field(default=None, ge=0)
    cost_price: float | None = Field(default=None, ge=0)
    sku: str = ""
    weight: float | None = None
    inventory_quantity: int = 0
    image: str = ""
    is_active: bool = True
    out_of_stock: bool = False

    def options(self) -> dict[str, str]:
        return {a.attribute_name: a.value for a in self.attributes}


class VariationMatrix(CamelModel):
    attributes: list[SelectedAttribute]
    variants: list[GeneratedVariant]
    default_selections: dict[str, str] = {}


class PriceMatrixEntry(CamelModel):
    price: float
    compare_price: float | None = None
    variant_id: str | None = None
    inventory_quantity: int = 0
    sku: str = ""


class VariantPriceResult(PriceMatrixEntry):
    title: str | None = None
    is_on_sale: bool
    savings: float
    discount_percentage: int


class GenerateVariantsRequest(CamelModel):
    attributes: list[SelectedAttribute]
    defaults: ProductDefaults = ProductDefaults()


class GenerateVariantsResponse(CamelModel):
    variants: list[GeneratedVariant]
    total: int


class MergeVariantsRequest(CamelModel):
    existing: list[dict[str, Any]] = []
    attributes: list[SelectedAttribute]
    defaults: ProductDefaults = ProductDefaults()


class MergeVariantsResponse(CamelModel):
    variants: list[dict[str, Any]]
    added: int
    total: int


class VariationMatrixRequest(CamelModel):
    attributes: list[SelectedAttribute]
    variants: list[GeneratedVariant]
    default_selections: dict[str, str] | None = None


class VariantPriceRequest(CamelModel):
    variants: list[GeneratedVariant]
    options: dict[str, str]
