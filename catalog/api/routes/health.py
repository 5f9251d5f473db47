from fastapi import APIRouter

from catalog.core.config import APP_VERSION, settings
from catalog.core.currency import CURRENCIES

router = APIRouter(tags=["health"])


def _check_config() -> dict:
    if settings.default_currency.upper() not in CURRENCIES:
        return {"status": "misconfigured", "error": f"unknown currency {settings.default_currency!r}"}
    return {
        "status": "ok",
        "default_currency": settings.default_currency.upper(),
        "max_variant_combinations": settings.max_variant_combinations,
    }


@router.get("/health")
async def health_check():
    checks = {"config": _check_config()}
    overall = "healthy" if checks["config"]["status"] == "ok" else "unhealthy"
    return {
        "status": overall,
        "version": APP_VERSION,
        "checks": checks,
    }
