"""Pydantic schemas for API requests and responses."""

from bonapp.schemas.pantry import PantryEntryCreate, PantryEntryResponse, PantryEntryUpdate
from bonapp.schemas.product import ProductResponse
from bonapp.schemas.recipe import (
    FavoriteResponse,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeResponse,
    RecommendationResponse,
)
from bonapp.schemas.shopping_list import (
    LineItemResponse,
    ListItemCreate,
    ListItemResponse,
    ListItemUpdate,
    ShoppingListCreate,
    ShoppingListResponse,
    ToggleBoughtResponse,
    TransferResponse,
)

__all__ = [
    "ShoppingListCreate",
    "ShoppingListResponse",
    "ListItemCreate",
    "ListItemUpdate",
    "ListItemResponse",
    "LineItemResponse",
    "ToggleBoughtResponse",
    "TransferResponse",
    "PantryEntryCreate",
    "PantryEntryUpdate",
    "PantryEntryResponse",
    "ProductResponse",
    "RecipeCreate",
    "RecipeResponse",
    "RecipeDetailResponse",
    "FavoriteResponse",
    "RecommendationResponse",
]
