"""Recipe recommendations from what is already in the pantry."""

import logging
from dataclasses import dataclass, field

from bonapp.gateway import DataGateway, Row
from bonapp.services.pantry_service import PantryService
from bonapp.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

QUICK_MAX_PREPARE_TIME = 30  # minutes
# Recipes carry these tags in their description text
VEGETARIAN_KEYWORD = "wegetari"
BUDGET_KEYWORD = "budżet"


@dataclass
class RecommendationFilters:
    max_missing: int = 3
    quick: bool = False
    vegetarian: bool = False
    budget: bool = False

    def accepts(self, recipe: Row) -> bool:
        description = (recipe.get("description") or "").casefold()
        if self.quick and (recipe.get("prepare_time") or 0) > QUICK_MAX_PREPARE_TIME:
            return False
        if self.vegetarian and VEGETARIAN_KEYWORD not in description:
            return False
        if self.budget and BUDGET_KEYWORD not in description:
            return False
        return True


@dataclass
class Recommendation:
    """A recipe and the ingredients the pantry is still missing for it."""

    recipe: Row
    missing_product_ids: list[int] = field(default_factory=list)
    available_product_ids: list[int] = field(default_factory=list)

    @property
    def missing_count(self) -> int:
        return len(self.missing_product_ids)


class RecommendationService:
    """Suggests visible recipes the owner can (almost) cook from their pantry."""

    def __init__(self, gateway: DataGateway):
        self.recipes = RecipeService(gateway)
        self.pantry = PantryService(gateway)

    async def recommend(
        self, owner_id: str, filters: RecommendationFilters | None = None
    ) -> list[Recommendation]:
        """Recipes missing at most ``filters.max_missing`` ingredient products.

        Ingredients are matched to pantry entries by product id. Results are
        ordered by how few products are missing, then by title.
        """
        filters = filters or RecommendationFilters()
        recipes = [r for r in await self.recipes.fetch_visible(owner_id) if filters.accepts(r)]
        if not recipes:
            return []

        stocked = await self.pantry.stocked_product_ids(owner_id)
        ingredients = await self.recipes.ingredient_product_ids([r["id"] for r in recipes])

        recommendations = []
        for recipe in recipes:
            needed = ingredients.get(recipe["id"], set())
            missing = sorted(needed - stocked)
            if len(missing) > filters.max_missing:
                continue
            recommendations.append(
                Recommendation(
                    recipe=recipe,
                    missing_product_ids=missing,
                    available_product_ids=sorted(needed & stocked),
                )
            )

        recommendations.sort(key=lambda r: (r.missing_count, r.recipe["title"].casefold()))
        logger.debug(
            f"{len(recommendations)} of {len(recipes)} recipes recommended for owner {owner_id}"
        )
        return recommendations
