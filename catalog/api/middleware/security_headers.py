from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from catalog.core.config import settings

# Rough wire size of one camelCase variant with two or three attributes
BYTES_PER_VARIANT = 2048
MIN_BODY_SIZE = 256 * 1024


def max_body_size() -> int:
    """Largest accepted body: a merge request carrying a full variant list."""
    return max(MIN_BODY_SIZE, settings.max_variant_combinations * BYTES_PER_VARIANT)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Size and content-type checks for the JSON admin API, plus response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "POST":
            content_type = request.headers.get("content-type", "")
            if content_type.split(";")[0].strip().lower() != "application/json":
                return JSONResponse(
                    status_code=415, content={"detail": "Expected an application/json body"}
                )
            content_length = request.headers.get("content-length")
            if content_length is not None:
                if not content_length.isdigit():
                    return JSONResponse(
                        status_code=400, content={"detail": "Invalid Content-Length header"}
                    )
                if int(content_length) > max_body_size():
                    return JSONResponse(
                        status_code=413,
                        content={"detail": "Request body too large for the variant limit"},
                    )

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        # Prices and profit figures must not be cached by proxies
        response.headers["Cache-Control"] = "no-store"
        return response
