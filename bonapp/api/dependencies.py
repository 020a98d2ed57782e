"""FastAPI dependencies for identity, gateway and services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bonapp.config import get_settings
from bonapp.database import get_db
from bonapp.gateway import DataGateway
from bonapp.gateway.rest import RestGateway
from bonapp.gateway.sql import SqlGateway
from bonapp.services.auth import get_owner_id
from bonapp.services.pantry_service import PantryService
from bonapp.services.reconciler import ListLockRegistry, PantryReconciler
from bonapp.services.recipe_service import RecipeService
from bonapp.services.recommendations import RecommendationService
from bonapp.services.shopping_list_service import ShoppingListService

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_current_owner_id(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> str:
    """Get the current owner id from the identity provider's JWT."""
    owner_id = get_owner_id(credentials.credentials)
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return owner_id


def get_optional_owner_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
) -> str | None:
    """Owner id if a valid token was sent, None otherwise."""
    if credentials is None:
        return None
    return get_owner_id(credentials.credentials)


def get_gateway(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
) -> DataGateway:
    """Gateway for the configured data backend."""
    settings = get_settings()
    if settings.data_backend == "rest":
        return RestGateway(
            settings.data_api_url,
            settings.data_api_key,
            access_token=credentials.credentials if credentials else None,
            timeout=settings.request_timeout,
        )
    return SqlGateway(db)


@lru_cache
def get_list_locks() -> ListLockRegistry:
    """Process-wide lock registry serialising transfers per list."""
    return ListLockRegistry()


def get_shopping_list_service(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(gateway)


def get_pantry_service(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(gateway)


def get_reconciler(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    owner_id: Annotated[str | None, Depends(get_optional_owner_id)],
    locks: Annotated[ListLockRegistry, Depends(get_list_locks)],
) -> PantryReconciler:
    """Get pantry reconciler acting for the caller (if identified)."""
    return PantryReconciler(gateway, identity=lambda: owner_id, locks=locks)


def get_recipe_service(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(gateway)


def get_recommendation_service(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> RecommendationService:
    return RecommendationService(gateway)
