"""Tests for the recipe catalogue and pantry-based recommendations."""

import pytest
import pytest_asyncio

from bonapp.models import PantryEntry, ProductInRecipe, RecipeCategory
from bonapp.services.recipe_service import RecipeService
from bonapp.services.recommendations import RecommendationFilters, RecommendationService

OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"


@pytest.fixture
def recipes(sql_gateway):
    return RecipeService(sql_gateway)


@pytest.fixture
def recommender(sql_gateway):
    return RecommendationService(sql_gateway)


@pytest.fixture
def recipe_categories(db):
    db.add_all([RecipeCategory(id=1, name="Obiady"), RecipeCategory(id=2, name="Zupy")])
    db.commit()


def stock(db, owner_id, *product_ids):
    db.add_all(PantryEntry(user_id=owner_id, product_id=pid, quantity=1) for pid in product_ids)
    db.commit()


class TestCatalogue:
    """Browsing, authoring and favourites."""

    @pytest.mark.asyncio
    async def test_visible_recipes(self, recipes):
        await recipes.create_recipe(OTHER_OWNER_ID, "zupa pomidorowa", 40, visibility=True)
        await recipes.create_recipe(OTHER_OWNER_ID, "Sekretny sos", 15, visibility=False)
        await recipes.create_recipe(OWNER_ID, "Makaron z masłem", 10, visibility=False)

        mine = [r["title"] for r in await recipes.fetch_visible(OWNER_ID)]
        anonymous = [r["title"] for r in await recipes.fetch_visible(None)]

        assert mine == ["Makaron z masłem", "zupa pomidorowa"]
        assert anonymous == ["zupa pomidorowa"]

    @pytest.mark.asyncio
    async def test_create_validates_input(self, recipes, products, recipe_categories):
        with pytest.raises(ValueError):
            await recipes.create_recipe(OWNER_ID, "   ", 10)
        with pytest.raises(ValueError):
            await recipes.create_recipe(OWNER_ID, "Zupa", 0)
        with pytest.raises(LookupError):
            await recipes.create_recipe(OWNER_ID, "Zupa", 10, ingredients=[(999, 1.0)])
        with pytest.raises(LookupError):
            await recipes.create_recipe(OWNER_ID, "Zupa", 10, categories=["Desery"])
        assert await recipes.fetch_visible(OWNER_ID) == []

    @pytest.mark.asyncio
    async def test_detail(self, recipes, products, recipe_categories, db):
        stock(db, OWNER_ID, products["Makaron"])
        recipe = await recipes.create_recipe(
            OWNER_ID,
            " Makaron z masłem ",
            10,
            description="Szybki obiad",
            steps=["Ugotuj makaron", "  ", "Dodaj masło"],
            ingredients=[(products["Makaron"], 250.0), (products["Masło"], None)],
            categories=["Obiady"],
        )
        await recipes.toggle_favorite(OWNER_ID, recipe["id"])

        detail = await recipes.get_detail(recipe["id"], OWNER_ID)

        assert detail["title"] == "Makaron z masłem"
        assert detail["steps"] == [
            {"order": 1, "instruction": "Ugotuj makaron"},
            {"order": 2, "instruction": "Dodaj masło"},
        ]
        assert [
            (i["product_name"], i["quantity"], i["in_pantry"]) for i in detail["ingredients"]
        ] == [
            ("Makaron", 250.0, True),
            ("Masło", None, False),
        ]
        assert detail["categories"] == ["Obiady"]
        assert detail["is_favorite"] is True

    @pytest.mark.asyncio
    async def test_private_detail_hidden_from_others(self, recipes):
        recipe = await recipes.create_recipe(OWNER_ID, "Sekretny sos", 15)

        assert await recipes.get_detail(recipe["id"], OTHER_OWNER_ID) is None
        assert await recipes.get_detail(recipe["id"], None) is None
        with pytest.raises(LookupError):
            await recipes.toggle_favorite(OTHER_OWNER_ID, recipe["id"])

    @pytest.mark.asyncio
    async def test_toggle_favorite(self, recipes):
        recipe = await recipes.create_recipe(OTHER_OWNER_ID, "Zupa", 30, visibility=True)

        assert await recipes.toggle_favorite(OWNER_ID, recipe["id"]) is True
        assert await recipes.favorite_ids(OWNER_ID) == {recipe["id"]}
        assert await recipes.toggle_favorite(OWNER_ID, recipe["id"]) is False
        assert await recipes.favorite_ids(OWNER_ID) == set()

    @pytest.mark.asyncio
    async def test_delete_only_own_recipe(self, recipes, products, db):
        recipe = await recipes.create_recipe(
            OWNER_ID, "Zupa", 30, visibility=True, ingredients=[(products["Ryż"], 100.0)]
        )
        await recipes.toggle_favorite(OTHER_OWNER_ID, recipe["id"])

        with pytest.raises(LookupError):
            await recipes.delete_recipe(OTHER_OWNER_ID, recipe["id"])

        await recipes.delete_recipe(OWNER_ID, recipe["id"])

        assert await recipes.fetch_visible(OWNER_ID) == []
        assert db.query(ProductInRecipe).count() == 0
        assert await recipes.favorite_ids(OTHER_OWNER_ID) == set()


class TestSearch:
    @pytest_asyncio.fixture
    async def catalogue(self, recipes, recipe_categories):
        soup = await recipes.create_recipe(
            OTHER_OWNER_ID, "Zupa pomidorowa", 40, visibility=True, categories=["Zupy"]
        )
        pasta = await recipes.create_recipe(
            OTHER_OWNER_ID, "Makaron z sosem", 20, visibility=True, categories=["Obiady"]
        )
        await recipes.create_recipe(OTHER_OWNER_ID, "Zupa sekretna", 10, categories=["Zupy"])
        return {"soup": soup["id"], "pasta": pasta["id"]}

    @pytest.mark.asyncio
    async def test_title_and_time(self, recipes, catalogue):
        by_title = await recipes.search(OWNER_ID, query="zupa")
        quick = await recipes.search(OWNER_ID, max_prepare_time=30)

        assert [r["title"] for r in by_title] == ["Zupa pomidorowa"]
        assert [r["title"] for r in quick] == ["Makaron z sosem"]

    @pytest.mark.asyncio
    async def test_categories(self, recipes, catalogue):
        soups = await recipes.search(OWNER_ID, categories=["Zupy"])
        either = await recipes.search(OWNER_ID, categories=["Zupy", "Obiady"])
        unknown = await recipes.search(OWNER_ID, categories=["Desery"])

        assert [r["title"] for r in soups] == ["Zupa pomidorowa"]
        assert [r["title"] for r in either] == ["Makaron z sosem", "Zupa pomidorowa"]
        assert unknown == []

    @pytest.mark.asyncio
    async def test_only_favorites(self, recipes, catalogue):
        assert await recipes.search(OWNER_ID, only_favorites=True) == []
        assert await recipes.search(None, only_favorites=True) == []

        await recipes.toggle_favorite(OWNER_ID, catalogue["pasta"])
        favorites = await recipes.search(OWNER_ID, only_favorites=True, categories=["Obiady"])

        assert [r["id"] for r in favorites] == [catalogue["pasta"]]

    @pytest.mark.asyncio
    async def test_wildcards_in_query_match_literally(self, recipes, catalogue):
        assert await recipes.search(OWNER_ID, query="%") == []
        assert await recipes.search(OWNER_ID, query="Zupa_pomidorowa") == []


class TestRecommendations:
    @pytest.mark.asyncio
    async def test_missing_ingredient_threshold(self, recipes, recommender, products, db):
        stock(db, OWNER_ID, products["Makaron"], products["Masło"])
        await recipes.create_recipe(
            OTHER_OWNER_ID,
            "Makaron z masłem",
            10,
            visibility=True,
            ingredients=[(products["Makaron"], 250.0), (products["Masło"], 20.0)],
        )
        await recipes.create_recipe(
            OTHER_OWNER_ID,
            "Risotto",
            40,
            visibility=True,
            ingredients=[
                (products["Ryż"], 200.0),
                (products["Mleko"], 100.0),
                (products["Masło"], 20.0),
            ],
        )

        everything = await recommender.recommend(OWNER_ID)
        strict = await recommender.recommend(OWNER_ID, RecommendationFilters(max_missing=1))

        assert [(r.recipe["title"], r.missing_product_ids) for r in everything] == [
            ("Makaron z masłem", []),
            ("Risotto", [products["Ryż"], products["Mleko"]]),
        ]
        assert everything[1].available_product_ids == [products["Masło"]]
        assert [r.recipe["title"] for r in strict] == ["Makaron z masłem"]

    @pytest.mark.asyncio
    async def test_duplicate_ingredients_count_once(self, recipes, recommender, products):
        await recipes.create_recipe(
            OWNER_ID,
            "Podwójny ryż",
            20,
            ingredients=[(products["Ryż"], 100.0), (products["Ryż"], 50.0)],
        )

        [recommendation] = await recommender.recommend(
            OWNER_ID, RecommendationFilters(max_missing=1)
        )

        assert recommendation.missing_count == 1

    @pytest.mark.asyncio
    async def test_filters(self, recipes, recommender):
        await recipes.create_recipe(OWNER_ID, "Leczo", 45, description="Danie WEGETARIAŃSKIE")
        await recipes.create_recipe(OWNER_ID, "Placki", 20, description="Tanie, na budżet")
        await recipes.create_recipe(
            OWNER_ID, "Sałatka", 10, description="Wegetariańska, budżetowa"
        )

        def titles(result):
            return [r.recipe["title"] for r in result]

        quick = await recommender.recommend(OWNER_ID, RecommendationFilters(quick=True))
        veggie = await recommender.recommend(OWNER_ID, RecommendationFilters(vegetarian=True))
        cheap = await recommender.recommend(OWNER_ID, RecommendationFilters(budget=True))
        both = await recommender.recommend(
            OWNER_ID, RecommendationFilters(vegetarian=True, budget=True, quick=True)
        )

        assert titles(quick) == ["Placki", "Sałatka"]
        assert titles(veggie) == ["Leczo", "Sałatka"]
        assert titles(cheap) == ["Placki", "Sałatka"]
        assert titles(both) == ["Sałatka"]

    @pytest.mark.asyncio
    async def test_other_owners_private_recipes_not_recommended(self, recipes, recommender):
        await recipes.create_recipe(OTHER_OWNER_ID, "Sekretny sos", 15)

        assert await recommender.recommend(OWNER_ID) == []
