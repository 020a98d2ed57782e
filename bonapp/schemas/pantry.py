"""Pantry schemas."""

from pydantic import BaseModel

from bonapp.schemas.shopping_list import QuantityInput


class PantryEntryCreate(QuantityInput):
    """Add stock for a product (merged into an existing entry)."""

    product_id: int


class PantryEntryUpdate(QuantityInput):
    """Overwrite the quantity of an entry."""


class PantryEntryResponse(BaseModel):
    """Pantry entry response."""

    id: int
    product_id: int
    quantity: float
    product_name: str = ""
    unit: str | None = None
    category_id: int | None = None
    category_name: str | None = None
