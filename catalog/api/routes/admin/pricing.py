from fastapi import APIRouter, Depends

from catalog.api.dependencies.auth import require_admin
from catalog.core.pricing import calculate_price_range, get_price_display
from catalog.models.dto.pricing import (
    PriceData,
    PriceDisplayResponse,
    PriceRangeRequest,
    PriceRangeResponse,
    TaxRequest,
    TaxResponse,
)
from catalog.services.tax_service import calculate_taxes, describe_tax

router = APIRouter(prefix="/pricing", tags=["admin-pricing"])


@router.post("/display", response_model=PriceDisplayResponse)
async def price_display(
    body: PriceData,
    admin: dict = Depends(require_admin),
):
    return get_price_display(body.model_dump())


@router.post("/range", response_model=PriceRangeResponse)
async def price_range(
    body: PriceRangeRequest,
    admin: dict = Depends(require_admin),
):
    return calculate_price_range(body.variants)


@router.post("/taxes", response_model=TaxResponse)
async def taxes(
    body: TaxRequest,
    admin: dict = Depends(require_admin),
):
    result = calculate_taxes(body.base_amount, body.vat_tax, body.service_tax)
    return {
        **result,
        "vat_description": describe_tax(body.vat_tax),
        "service_description": describe_tax(body.service_tax),
    }
