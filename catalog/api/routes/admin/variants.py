import logging

from fastapi import APIRouter, Depends

from catalog.api.dependencies.auth import require_admin
from catalog.core.config import settings
from catalog.core.exceptions import NotFoundError, VariantLimitExceededError
from catalog.models.dto.attribute import SelectedAttribute
from catalog.models.dto.variant import (
    GeneratedVariant,
    GenerateVariantsRequest,
    GenerateVariantsResponse,
    MergeVariantsRequest,
    MergeVariantsResponse,
    VariantPriceRequest,
    VariantPriceResult,
    VariationMatrix,
    VariationMatrixRequest,
)
from catalog.services import variant_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/variants", tags=["admin-variants"])


def _enforce_limit(attributes: list[SelectedAttribute]) -> None:
    requested = variant_service.count_combinations(attributes)
    if requested > settings.max_variant_combinations:
        logger.warning(
            "Rejected variant generation: %d combinations (limit %d)",
            requested, settings.max_variant_combinations,
        )
        raise VariantLimitExceededError(requested, settings.max_variant_combinations)


@router.post("/generate", response_model=GenerateVariantsResponse)
async def generate_variants(
    body: GenerateVariantsRequest,
    admin: dict = Depends(require_admin),
):
    _enforce_limit(body.attributes)
    variants = variant_service.generate_variants(body.attributes, body.defaults)
    return {"variants": variants, "total": len(variants)}


@router.post("/merge", response_model=MergeVariantsResponse)
async def merge_variants(
    body: MergeVariantsRequest,
    admin: dict = Depends(require_admin),
):
    _enforce_limit(body.attributes)
    merged, added = variant_service.merge_variants(body.existing, body.attributes, body.defaults)
    return {
        "variants": [
            v.model_dump(by_alias=True) if isinstance(v, GeneratedVariant) else v
            for v in merged
        ],
        "added": len(added),
        "total": len(merged),
    }


@router.post("/matrix", response_model=VariationMatrix)
async def build_matrix(
    body: VariationMatrixRequest,
    admin: dict = Depends(require_admin),
):
    return variant_service.build_variation_matrix(
        body.attributes, body.variants, body.default_selections
    )


@router.post("/price", response_model=VariantPriceResult)
async def variant_price(
    body: VariantPriceRequest,
    admin: dict = Depends(require_admin),
):
    result = variant_service.find_variant_price(body.variants, body.options)
    if result is None:
        raise NotFoundError("No variant matches the selected options")
    return result
