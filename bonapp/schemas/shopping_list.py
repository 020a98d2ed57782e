"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bonapp.services.quantity import parse_quantity


class ShoppingListCreate(BaseModel):
    """Create a new shopping list."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("List name cannot be empty")
        return value


class ShoppingListResponse(BaseModel):
    """Shopping list response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    owner_id: str
    created_at: datetime | None = None


class QuantityInput(BaseModel):
    """Quantity typed by the user: "2,5" and "2.5" are the same amount."""

    quantity: float

    @field_validator("quantity", mode="before")
    @classmethod
    def parse(cls, value):
        return parse_quantity(value)


class ListItemCreate(QuantityInput):
    """Add a product to a list."""

    product_id: int


class ListItemUpdate(QuantityInput):
    """Change the total quantity of a product on a list."""


class LineItemResponse(BaseModel):
    """A raw stored row, duplicates not merged."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    shopping_list_id: str
    product_id: int
    quantity: float
    is_bought: bool
    product_name: str
    product_category_id: int | None = None
    unit: str | None = None


class ListItemResponse(BaseModel):
    """One product on a list, duplicates merged."""

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    total_quantity: float
    all_bought: bool
    display_name: str
    unit: str | None = None
    category_id: int | None = None
    row_ids: list[int]


class ToggleBoughtResponse(BaseModel):
    product_id: int
    is_bought: bool


class TransferResponse(BaseModel):
    """Result of moving bought items to the pantry."""

    model_config = ConfigDict(from_attributes=True)

    moved: dict[int, float]
    inserted: int
    updated: int
    deleted_row_ids: list[int]
    skipped: bool
    list_empty: bool
