from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.core.exceptions import ForbiddenError, UnauthorizedError
from catalog.core.security import verify_access_token

security = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    if not credentials:
        raise UnauthorizedError("Missing authentication token")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    request.state.user_id = payload.get("sub")
    return payload


async def require_admin(
    claims: dict = Depends(get_current_claims),
) -> dict:
    if claims.get("role") != "admin":
        raise ForbiddenError("Admin access required")
    return claims
