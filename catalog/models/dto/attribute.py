from pydantic import Field

from catalog.models.dto.common import CamelModel


class AttributeValue(CamelModel):
    id: str
    value: str = Field(min_length=1)
    slug: str = ""
    color_code: str | None = None
    image: str | None = None


class Attribute(CamelModel):
    id: str
    name: str = Field(min_length=1, max_length=255)
    slug: str = ""
    # Drives the widget (swatch, dropdown, radio) only
    type: str = "select"


class SelectedAttribute(Attribute):
    values: list[AttributeValue] = []
