"""Recipe catalogue: browsing, search, authoring and favourites."""

import logging
from collections.abc import Iterable
from typing import Any

from bonapp.gateway import DataGateway, Order, Row, eq, escape_like, ilike, in_, lte
from bonapp.gateway.collections import (
    FAVORITE_RECIPES,
    RECIPE_CATEGORIES,
    RECIPE_CATEGORY_LINKS,
    RECIPE_INGREDIENTS,
    RECIPES,
)
from bonapp.services.pantry_service import PantryService
from bonapp.services.products import ProductService

logger = logging.getLogger(__name__)

RECIPE_COLUMNS = ["id", "title", "description", "prepare_time", "visibility", "user_id"]


def sort_by_title(recipes: Iterable[Row]) -> list[Row]:
    return sorted(recipes, key=lambda r: (r["title"].casefold(), r["id"]))


def is_visible(recipe: Row, owner_id: str | None) -> bool:
    """Public recipes are visible to everyone, private ones to their author only."""
    return bool(recipe["visibility"]) or (owner_id is not None and recipe["user_id"] == owner_id)


class RecipeService:
    """Service for recipe operations."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self.products = ProductService(gateway)
        self.pantry = PantryService(gateway)

    # --- Browsing ---

    async def fetch_visible(self, owner_id: str | None) -> list[Row]:
        """Public recipes plus the owner's private ones, sorted by title."""
        merged = {
            row["id"]: row
            for row in await self.gateway.select(
                RECIPES, columns=RECIPE_COLUMNS, filters=[eq("visibility", True)]
            )
        }
        if owner_id:
            own = await self.gateway.select(
                RECIPES, columns=RECIPE_COLUMNS, filters=[eq("user_id", owner_id)]
            )
            merged.update((row["id"], row) for row in own)
        return sort_by_title(merged.values())

    async def get_recipe(self, recipe_id: str, owner_id: str | None) -> Row | None:
        rows = await self.gateway.select(
            RECIPES,
            columns=[*RECIPE_COLUMNS, "steps_list"],
            filters=[eq("id", recipe_id)],
            limit=1,
        )
        if not rows or not is_visible(rows[0], owner_id):
            return None
        return rows[0]

    async def get_detail(self, recipe_id: str, owner_id: str | None) -> dict[str, Any] | None:
        """Recipe with ordered steps, ingredients, category names and the caller's flags.

        ``in_pantry`` on each ingredient and ``is_favorite`` are always False
        for anonymous callers.
        """
        recipe = await self.get_recipe(recipe_id, owner_id)
        if recipe is None:
            return None

        ingredient_rows = await self.gateway.select(
            RECIPE_INGREDIENTS,
            columns=["product_id", "quantity"],
            filters=[eq("recipe_id", recipe_id)],
            order=[Order("id")],
        )
        products = await self.products.get_many(row["product_id"] for row in ingredient_rows)
        stocked = await self.pantry.stocked_product_ids(owner_id) if owner_id else set()
        favorites = await self.favorite_ids(owner_id) if owner_id else set()

        steps = sorted(recipe.pop("steps_list") or [], key=lambda s: s["order"])
        ingredients = []
        for row in ingredient_rows:
            product = products.get(row["product_id"], {})
            ingredients.append(
                {
                    "product_id": row["product_id"],
                    "quantity": row["quantity"],
                    "product_name": product.get("name") or "",
                    "unit": product.get("unit"),
                    "in_pantry": row["product_id"] in stocked,
                }
            )

        return {
            **recipe,
            "steps": steps,
            "ingredients": ingredients,
            "categories": await self._category_names_for(recipe_id),
            "is_favorite": recipe_id in favorites,
        }

    async def fetch_categories(self) -> list[str]:
        rows = await self.gateway.select(
            RECIPE_CATEGORIES, columns=["name"], order=[Order("name")]
        )
        return [row["name"] for row in rows]

    async def _category_names_for(self, recipe_id: str) -> list[str]:
        links = await self.gateway.select(
            RECIPE_CATEGORY_LINKS, columns=["category_id"], filters=[eq("recipe_id", recipe_id)]
        )
        if not links:
            return []
        rows = await self.gateway.select(
            RECIPE_CATEGORIES,
            columns=["name"],
            filters=[in_("id", [link["category_id"] for link in links])],
            order=[Order("name")],
        )
        return [row["name"] for row in rows]

    async def ingredient_product_ids(self, recipe_ids: list[str]) -> dict[str, set[int]]:
        """Distinct ingredient product ids per recipe; recipes without any map to an empty set."""
        result: dict[str, set[int]] = {recipe_id: set() for recipe_id in recipe_ids}
        if not recipe_ids:
            return result
        rows = await self.gateway.select(
            RECIPE_INGREDIENTS,
            columns=["recipe_id", "product_id"],
            filters=[in_("recipe_id", recipe_ids)],
        )
        for row in rows:
            result.setdefault(row["recipe_id"], set()).add(row["product_id"])
        return result

    # --- Search ---

    async def search(
        self,
        owner_id: str | None,
        query: str = "",
        max_prepare_time: int | None = None,
        categories: Iterable[str] = (),
        only_favorites: bool = False,
    ) -> list[Row]:
        """Visible recipes matching every given criterion, sorted by title.

        ``categories`` matches recipes in any of the named categories. Asking
        for favourites without any (or anonymously) yields nothing.
        """
        filters = []
        trimmed = query.strip()
        if trimmed:
            filters.append(ilike("title", f"%{escape_like(trimmed)}%"))
        if max_prepare_time is not None:
            filters.append(lte("prepare_time", max_prepare_time))

        allowed_ids: set[str] | None = None
        if only_favorites:
            allowed_ids = await self.favorite_ids(owner_id) if owner_id else set()

        names = sorted({name.strip() for name in categories if name.strip()})
        if names:
            in_categories = await self._recipe_ids_in_categories(names)
            allowed_ids = in_categories if allowed_ids is None else allowed_ids & in_categories

        if allowed_ids is not None:
            if not allowed_ids:
                return []
            filters.append(in_("id", sorted(allowed_ids)))

        rows = await self.gateway.select(RECIPES, columns=RECIPE_COLUMNS, filters=filters)
        return sort_by_title(row for row in rows if is_visible(row, owner_id))

    async def _recipe_ids_in_categories(self, names: list[str]) -> set[str]:
        category_rows = await self.gateway.select(
            RECIPE_CATEGORIES, columns=["id"], filters=[in_("name", names)]
        )
        if not category_rows:
            return set()
        links = await self.gateway.select(
            RECIPE_CATEGORY_LINKS,
            columns=["recipe_id"],
            filters=[in_("category_id", [row["id"] for row in category_rows])],
        )
        return {link["recipe_id"] for link in links}

    # --- Authoring ---

    async def create_recipe(
        self,
        owner_id: str,
        title: str,
        prepare_time: int,
        description: str | None = None,
        visibility: bool = False,
        steps: Iterable[str] = (),
        ingredients: Iterable[tuple[int, float | None]] = (),
        categories: Iterable[str] = (),
    ) -> Row:
        """Create a recipe with its ingredients and categories.

        Raises:
            ValueError: blank title or non-positive preparation time
            LookupError: unknown product or category
        """
        title = title.strip()
        if not title:
            raise ValueError("Recipe title cannot be empty")
        if prepare_time <= 0:
            raise ValueError("Preparation time must be a positive number of minutes")

        ingredients = list(ingredients)
        products = await self.products.get_many(product_id for product_id, _ in ingredients)
        unknown = sorted({product_id for product_id, _ in ingredients} - products.keys())
        if unknown:
            raise LookupError(f"Products not found: {unknown}")

        names = sorted({name.strip() for name in categories if name.strip()})
        category_ids = []
        if names:
            rows = await self.gateway.select(
                RECIPE_CATEGORIES, columns=["id", "name"], filters=[in_("name", names)]
            )
            missing = sorted(set(names) - {row["name"] for row in rows})
            if missing:
                raise LookupError(f"Categories not found: {missing}")
            category_ids = [row["id"] for row in rows]

        instructions = [step.strip() for step in steps if step.strip()]
        recipe = (
            await self.gateway.insert(
                RECIPES,
                {
                    "user_id": owner_id,
                    "title": title,
                    "description": description,
                    "prepare_time": prepare_time,
                    "visibility": visibility,
                    "steps_list": [
                        {"order": i, "instruction": text}
                        for i, text in enumerate(instructions, start=1)
                    ],
                },
            )
        )[0]

        if ingredients:
            await self.gateway.insert(
                RECIPE_INGREDIENTS,
                [
                    {"recipe_id": recipe["id"], "product_id": product_id, "quantity": quantity}
                    for product_id, quantity in ingredients
                ],
            )
        if category_ids:
            await self.gateway.insert(
                RECIPE_CATEGORY_LINKS,
                [{"recipe_id": recipe["id"], "category_id": cid} for cid in category_ids],
            )

        logger.info(f"Created recipe '{title}' ({recipe['id']}) for owner {owner_id}")
        return {column: recipe[column] for column in RECIPE_COLUMNS}

    async def delete_recipe(self, owner_id: str, recipe_id: str) -> None:
        """Delete one of the owner's recipes with its ingredients, categories and bookmarks."""
        rows = await self.gateway.select(
            RECIPES, columns=["id"], filters=[eq("id", recipe_id), eq("user_id", owner_id)]
        )
        if not rows:
            raise LookupError(f"Recipe {recipe_id} not found")

        await self.gateway.delete(RECIPE_INGREDIENTS, [eq("recipe_id", recipe_id)])
        await self.gateway.delete(RECIPE_CATEGORY_LINKS, [eq("recipe_id", recipe_id)])
        await self.gateway.delete(FAVORITE_RECIPES, [eq("recipe_id", recipe_id)])
        await self.gateway.delete(RECIPES, [eq("id", recipe_id), eq("user_id", owner_id)])
        logger.info(f"Deleted recipe {recipe_id}")

    # --- Favourites ---

    async def favorite_ids(self, owner_id: str) -> set[str]:
        rows = await self.gateway.select(
            FAVORITE_RECIPES, columns=["recipe_id"], filters=[eq("user_id", owner_id)]
        )
        return {row["recipe_id"] for row in rows}

    async def toggle_favorite(self, owner_id: str, recipe_id: str) -> bool:
        """Bookmark a visible recipe, or remove the bookmark. Returns the new state."""
        if await self.get_recipe(recipe_id, owner_id) is None:
            raise LookupError(f"Recipe {recipe_id} not found")

        removed = await self.gateway.delete(
            FAVORITE_RECIPES, [eq("user_id", owner_id), eq("recipe_id", recipe_id)]
        )
        if removed:
            return False
        await self.gateway.insert(FAVORITE_RECIPES, {"user_id": owner_id, "recipe_id": recipe_id})
        return True
