import logging

from fastapi import APIRouter, Depends

from catalog.api.dependencies.auth import require_admin
from catalog.core.json_utils import normalize_product
from catalog.models.dto.normalize import NormalizeProductRequest, NormalizeProductResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/normalize", tags=["admin-normalize"])

NORMALIZED_FIELDS = ("variationAttributes", "images", "tags", "variants")


@router.post("/product", response_model=NormalizeProductResponse)
async def normalize_product_record(
    body: NormalizeProductRequest,
    admin: dict = Depends(require_admin),
):
    fields = [f for f in NORMALIZED_FIELDS if f in body.product]
    logger.info(
        "Normalizing product record",
        extra={"product_id": body.product.get("id"), "normalized_fields": fields},
    )
    return {
        "product": normalize_product(body.product),
        "normalized_fields": fields,
    }
