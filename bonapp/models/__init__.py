"""SQLAlchemy models."""

from bonapp.models.pantry import PantryEntry
from bonapp.models.product import Product, ProductCategory
from bonapp.models.recipe import (
    FavoriteRecipe,
    ProductInRecipe,
    Recipe,
    RecipeCategory,
    RecipeCategoryLink,
)
from bonapp.models.shopping_list import ProductOnList, ShoppingList

__all__ = [
    "ShoppingList",
    "ProductOnList",
    "Product",
    "ProductCategory",
    "PantryEntry",
    "Recipe",
    "RecipeCategory",
    "RecipeCategoryLink",
    "ProductInRecipe",
    "FavoriteRecipe",
]
