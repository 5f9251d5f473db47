import logging
from urllib.parse import urlsplit

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.core.config import settings

logger = logging.getLogger(__name__)


def normalize_origins(origins: list[str]) -> list[str]:
    """Reduce configured origins to ``scheme://host[:port]``, deduplicated.

    The dashboard sends a Bearer token, not cookies, but a wildcard would still
    expose the admin endpoints to any page, so it is refused.
    """
    result = []
    for origin in origins:
        if origin == "*":
            raise ValueError("Wildcard CORS origin is not allowed for the admin API")
        parts = urlsplit(origin)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid CORS origin: {origin!r}")
        if parts.path not in ("", "/") or parts.query or parts.fragment:
            raise ValueError(f"CORS origin must not include a path: {origin!r}")
        value = f"{parts.scheme}://{parts.netloc}".lower()
        if value not in result:
            result.append(value)
    return result


def setup_cors(app: FastAPI) -> None:
    origins = normalize_origins(settings.cors_origins_list)
    if not origins:
        logger.warning("No CORS origins configured; dashboard calls from a browser will fail")
        return
    logger.info("CORS enabled for %s", ", ".join(origins))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )
