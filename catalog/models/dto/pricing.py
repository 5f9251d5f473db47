from typing import Literal

from pydantic import Field

from catalog.models.dto.common import CamelModel


class PriceData(CamelModel):
    price: float | str | None = None
    compare_price: float | str | None = None
    cost_price: float | str | None = None


class PriceDisplayResponse(CamelModel):
    price: str
    original_price: str | None = None
    discount_percentage: int
    profit_margin: int
    is_on_sale: bool
    savings: str | None = None


class PriceRangeRequest(CamelModel):
    variants: list[PriceData]


class PriceRangeResponse(CamelModel):
    min: float
    max: float
    min_formatted: str
    max_formatted: str
    range: str
    has_range: bool


class TaxSetting(CamelModel):
    enabled: bool = False
    type: Literal["percentage", "fixed"] = "percentage"
    value: float = Field(default=0.0, ge=0)


class TaxRequest(CamelModel):
    base_amount: float = Field(ge=0)
    vat_tax: TaxSetting = TaxSetting()
    service_tax: TaxSetting = TaxSetting()


class TaxResponse(CamelModel):
    vat_amount: float
    service_amount: float
    total_tax_amount: float
    final_amount: float
    vat_description: str
    service_description: str


class OrderItemData(CamelModel):
    id: str
    product_id: str
    variant_id: str | None = None
    product_name: str
    variant_title: str | None = None
    quantity: int = Field(ge=0)
    weight_quantity: float | None = None  # grams
    price: float
    cost_price: float | None = None
    total_price: float = 0.0
    total_cost: float | None = None
    is_weight_based: bool = False
    order_type: str | None = None  # delivery, pickup, shipping
    order_id: str | None = None
    has_assigned_driver: bool = False


class ProfitReportRequest(CamelModel):
    items: list[OrderItemData]
    currency: str | None = None


class ProfitSummary(CamelModel):
    total_revenue: float
    total_cost: float
    total_driver_payments: float
    total_cost_with_driver: float
    total_profit: float
    average_margin: float
    profitable_items: int
    loss_items: int
    total_items: int


class ProfitReportResponse(CamelModel):
    summary: ProfitSummary
    status: str
    margin_tier: dict[str, str]
    formatted_profit: str
    rows: list[dict[str, str | int | float]]
