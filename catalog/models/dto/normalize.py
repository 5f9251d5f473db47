from typing import Any

from pydantic import BaseModel


class NormalizeProductRequest(BaseModel):
    # Raw stored product row; keys stay as the dashboard wrote them
    product: dict[str, Any]


class NormalizeProductResponse(BaseModel):
    product: dict[str, Any]
    normalized_fields: list[str]
