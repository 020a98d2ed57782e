"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bonapp.api.dependencies import (
    get_current_owner_id,
    get_optional_owner_id,
    get_recipe_service,
    get_recommendation_service,
)
from bonapp.schemas.recipe import (
    FavoriteResponse,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeResponse,
    RecommendationResponse,
)
from bonapp.services.recipe_service import RecipeService
from bonapp.services.recommendations import RecommendationFilters, RecommendationService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

Service = Annotated[RecipeService, Depends(get_recipe_service)]
OwnerId = Annotated[str, Depends(get_current_owner_id)]
OptionalOwnerId = Annotated[str | None, Depends(get_optional_owner_id)]


@router.get("", response_model=list[RecipeResponse])
async def get_recipes(owner_id: OptionalOwnerId, service: Service):
    """Get public recipes and, when signed in, the caller's own."""
    return await service.fetch_visible(owner_id)


@router.get("/categories", response_model=list[str])
async def get_categories(service: Service):
    """Get recipe category names for the search filters."""
    return await service.fetch_categories()


@router.get("/search", response_model=list[RecipeResponse])
async def search_recipes(
    owner_id: OptionalOwnerId,
    service: Service,
    q: str = Query(default="", max_length=100, description="Part of the title"),
    max_prepare_time: int | None = Query(default=None, ge=1),
    category: list[str] = Query(default=[], description="Match any of these categories"),
    only_favorites: bool = False,
):
    """Search recipes by title, preparation time, categories and favourites."""
    return await service.search(
        owner_id,
        query=q,
        max_prepare_time=max_prepare_time,
        categories=category,
        only_favorites=only_favorites,
    )


@router.get("/recommendations", response_model=list[RecommendationResponse])
async def get_recommendations(
    owner_id: OwnerId,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
    max_missing: int = Query(default=3, ge=0, le=50),
    quick: bool = False,
    vegetarian: bool = False,
    budget: bool = False,
):
    """Recipes that can be cooked from the caller's pantry with few extra products."""
    filters = RecommendationFilters(
        max_missing=max_missing, quick=quick, vegetarian=vegetarian, budget=budget
    )
    recommendations = await service.recommend(owner_id, filters)
    return [RecommendationResponse.model_validate(r) for r in recommendations]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(recipe_data: RecipeCreate, owner_id: OwnerId, service: Service):
    """Create a new recipe."""
    try:
        return await service.create_recipe(
            owner_id,
            title=recipe_data.title,
            prepare_time=recipe_data.prepare_time,
            description=recipe_data.description,
            visibility=recipe_data.visibility,
            steps=recipe_data.steps,
            ingredients=[(i.product_id, i.quantity) for i in recipe_data.ingredients],
            categories=recipe_data.categories,
        )
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
async def get_recipe(recipe_id: str, owner_id: OptionalOwnerId, service: Service):
    """Get a recipe with its steps and ingredients."""
    detail = await service.get_detail(recipe_id, owner_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return detail


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, owner_id: OwnerId, service: Service):
    """Delete one of the caller's recipes."""
    try:
        await service.delete_recipe(owner_id, recipe_id)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        ) from None


@router.post("/{recipe_id}/favorite", response_model=FavoriteResponse)
async def toggle_favorite(recipe_id: str, owner_id: OwnerId, service: Service):
    """Bookmark a recipe, or remove the bookmark."""
    try:
        is_favorite = await service.toggle_favorite(owner_id, recipe_id)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        ) from None
    return FavoriteResponse(recipe_id=recipe_id, is_favorite=is_favorite)
