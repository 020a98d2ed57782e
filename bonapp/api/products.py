"""Product search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bonapp.api.dependencies import get_current_owner_id, get_shopping_list_service
from bonapp.schemas.product import ProductResponse
from bonapp.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("/search", response_model=list[ProductResponse])
async def search_products(
    owner_id: Annotated[str, Depends(get_current_owner_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
    q: str = Query(default="", max_length=100, description="Part of the product name"),
    limit: int = Query(default=5, ge=1, le=50),
):
    """Suggest products for the add-to-list form."""
    return await service.search_products(q, limit=limit)
