"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from bonapp.api.dependencies import (
    get_current_owner_id,
    get_optional_owner_id,
    get_reconciler,
    get_shopping_list_service,
)
from bonapp.gateway import Row
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
from bonapp.services.reconciler import PantryReconciler
from bonapp.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])

Service = Annotated[ShoppingListService, Depends(get_shopping_list_service)]
OwnerId = Annotated[str, Depends(get_current_owner_id)]


async def get_owned_list(service: ShoppingListService, list_id: str, owner_id: str) -> Row:
    """Get a list that the user owns."""
    list_row = await service.get_list(list_id)
    if not list_row or list_row["owner_id"] != owner_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="List not found")
    return list_row


@router.get("", response_model=list[ShoppingListResponse])
async def get_lists(owner_id: OwnerId, service: Service):
    """Get all lists owned by the current user."""
    return await service.fetch_lists(owner_id)


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(list_data: ShoppingListCreate, owner_id: OwnerId, service: Service):
    """Create a new shopping list."""
    return await service.create_list(owner_id, list_data.name)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(list_id: str, owner_id: OwnerId, service: Service):
    """Delete a list and everything on it."""
    await get_owned_list(service, list_id, owner_id)
    await service.delete_list(list_id)


@router.get("/{list_id}/items", response_model=list[ListItemResponse])
async def get_items(list_id: str, owner_id: OwnerId, service: Service):
    """Get the list with duplicate rows merged per product."""
    await get_owned_list(service, list_id, owner_id)
    items = await service.fetch_items(list_id)
    return [ListItemResponse.model_validate(item) for item in items]


@router.get("/{list_id}/items/raw", response_model=list[LineItemResponse])
async def get_raw_items(list_id: str, owner_id: OwnerId, service: Service):
    """Get every stored row of the list, duplicates included."""
    await get_owned_list(service, list_id, owner_id)
    items = await service.fetch_raw_items(list_id)
    return [LineItemResponse.model_validate(item) for item in items]


@router.post(
    "/{list_id}/items", response_model=LineItemResponse, status_code=status.HTTP_201_CREATED
)
async def add_item(list_id: str, item_data: ListItemCreate, owner_id: OwnerId, service: Service):
    """Add a product to the list."""
    await get_owned_list(service, list_id, owner_id)
    try:
        item = await service.add_item(list_id, item_data.product_id, item_data.quantity)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return LineItemResponse.model_validate(item)


@router.put("/{list_id}/items/{product_id}", response_model=list[ListItemResponse])
async def update_item(
    list_id: str,
    product_id: int,
    item_data: ListItemUpdate,
    owner_id: OwnerId,
    service: Service,
):
    """Set the total quantity of a product on the list."""
    await get_owned_list(service, list_id, owner_id)
    try:
        await service.update_quantity(list_id, product_id, item_data.quantity)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    items = await service.fetch_items(list_id)
    return [ListItemResponse.model_validate(item) for item in items]


@router.post("/{list_id}/items/{product_id}/toggle-bought", response_model=ToggleBoughtResponse)
async def toggle_bought(list_id: str, product_id: int, owner_id: OwnerId, service: Service):
    """Mark a product bought, or not bought if it already was."""
    await get_owned_list(service, list_id, owner_id)
    try:
        is_bought = await service.toggle_bought(list_id, product_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return ToggleBoughtResponse(product_id=product_id, is_bought=is_bought)


@router.delete("/{list_id}/items/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(list_id: str, product_id: int, owner_id: OwnerId, service: Service):
    """Remove a product (all of its rows) from the list."""
    await get_owned_list(service, list_id, owner_id)
    try:
        await service.delete_item(list_id, product_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None


@router.post("/{list_id}/transfer-to-pantry", response_model=TransferResponse)
async def transfer_to_pantry(
    list_id: str,
    owner_id: Annotated[str | None, Depends(get_optional_owner_id)],
    service: Service,
    reconciler: Annotated[PantryReconciler, Depends(get_reconciler)],
):
    """Move bought items into the caller's pantry.

    Without a resolvable identity nothing is changed and the result is
    reported as skipped.
    """
    if owner_id is not None:
        await get_owned_list(service, list_id, owner_id)
    result = await reconciler.transfer_bought(list_id)
    return TransferResponse.model_validate(result)
