import logging

from fastapi import APIRouter, Depends

from catalog.api.dependencies.auth import require_admin
from catalog.core.config import settings
from catalog.core.currency import format_currency
from catalog.core.exceptions import BadRequestError
from catalog.models.dto.pricing import ProfitReportRequest, ProfitReportResponse
from catalog.services.profit_service import (
    calculate_order_profit_summary,
    format_profit_rows,
    get_profit_margin_tier,
    get_profit_status,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["admin-reports"])


@router.post("/profit", response_model=ProfitReportResponse)
async def profit_report(
    body: ProfitReportRequest,
    admin: dict = Depends(require_admin),
):
    summary = calculate_order_profit_summary(body.items)
    try:
        formatted_profit = format_currency(summary["total_profit"], body.currency)
    except ValueError as e:
        raise BadRequestError(str(e)) from e

    logger.info(
        "Profit report for %d items", len(body.items),
        extra={"currency": body.currency or settings.default_currency},
    )

    return {
        "summary": summary,
        "status": get_profit_status(summary["total_profit"]),
        "margin_tier": get_profit_margin_tier(summary["average_margin"]),
        "formatted_profit": formatted_profit,
        "rows": format_profit_rows(body.items),
    }
