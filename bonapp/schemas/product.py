"""Product schemas."""

from pydantic import BaseModel, ConfigDict


class ProductResponse(BaseModel):
    """Product suggestion."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    unit: str | None = None
    category_id: int | None = None
