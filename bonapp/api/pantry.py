"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from bonapp.api.dependencies import get_current_owner_id, get_pantry_service
from bonapp.schemas.pantry import PantryEntryCreate, PantryEntryResponse, PantryEntryUpdate
from bonapp.services.pantry_service import PantryService

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])

Service = Annotated[PantryService, Depends(get_pantry_service)]
OwnerId = Annotated[str, Depends(get_current_owner_id)]


async def _entry_or_404(service: PantryService, owner_id: str, entry_id: int) -> dict:
    """Re-read an entry with product details; it may have been removed meanwhile."""
    entries = await service.fetch_entries(owner_id)
    entry = next((e for e in entries if e["id"] == entry_id), None)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pantry entry not found")
    return entry


@router.get("", response_model=list[PantryEntryResponse])
async def list_pantry_entries(owner_id: OwnerId, service: Service):
    """List the current user's pantry."""
    return await service.fetch_entries(owner_id)


@router.post("", response_model=PantryEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_pantry_entry(entry_data: PantryEntryCreate, owner_id: OwnerId, service: Service):
    """Add stock; an existing entry for the product is increased instead of duplicated."""
    try:
        row = await service.add_entry(owner_id, entry_data.product_id, entry_data.quantity)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return await _entry_or_404(service, owner_id, row["id"])


@router.put("/{entry_id}", response_model=PantryEntryResponse)
async def update_pantry_entry(
    entry_id: int,
    entry_data: PantryEntryUpdate,
    owner_id: OwnerId,
    service: Service,
):
    """Overwrite the quantity of a pantry entry."""
    try:
        await service.set_quantity(owner_id, entry_id, entry_data.quantity)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Pantry entry not found"
        ) from None
    return await _entry_or_404(service, owner_id, entry_id)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pantry_entry(entry_id: int, owner_id: OwnerId, service: Service):
    """Remove an entry from the pantry."""
    try:
        await service.delete_entry(owner_id, entry_id)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Pantry entry not found"
        ) from None
