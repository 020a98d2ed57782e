"""Moving bought shopping list items into the pantry."""

import asyncio
import logging
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field

from bonapp.gateway import DataGateway, GatewayError, Order, eq, in_
from bonapp.gateway.collections import LIST_ITEMS
from bonapp.services.aggregation import ShoppingListLineItem, sum_quantities_by_product
from bonapp.services.pantry_service import PantryService

logger = logging.getLogger(__name__)

IdentityResolver = Callable[[], str | None]


class ListLockRegistry:
    """One ``asyncio.Lock`` per shopping list id.

    Locks are held weakly and disappear once no transfer holds or waits on them.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, list_id: str) -> asyncio.Lock:
        lock = self._locks.get(list_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[list_id] = lock
        return lock

    def is_locked(self, list_id: str) -> bool:
        lock = self._locks.get(list_id)
        return lock is not None and lock.locked()


@dataclass
class TransferResult:
    """Outcome of one transfer run."""

    moved: dict[int, float] = field(default_factory=dict)  # product_id -> quantity added
    inserted: int = 0
    updated: int = 0
    deleted_row_ids: list[int] = field(default_factory=list)
    skipped: bool = False
    list_empty: bool = False


class PantryReconciler:
    """Folds bought list rows into the owner's pantry and removes them from the list.

    There is no transaction around the steps. If a pantry write succeeds and
    the following delete fails, the pantry keeps the added quantity while the
    rows stay on the list (a later retry adds them again).
    """

    def __init__(
        self,
        gateway: DataGateway,
        identity: IdentityResolver,
        locks: ListLockRegistry | None = None,
    ):
        self.gateway = gateway
        self.identity = identity
        self.locks = locks or ListLockRegistry()
        self.pantry = PantryService(gateway)

    async def transfer_bought(self, list_id: str) -> TransferResult:
        """Transfer the list's bought items. Runs for the same list are queued."""
        async with self.locks.lock_for(list_id):
            try:
                return await self._transfer(list_id)
            except GatewayError as e:
                logger.error(f"Transfer to pantry for list {list_id} aborted: {e}")
                raise

    async def _transfer(self, list_id: str) -> TransferResult:
        rows = await self.gateway.select(
            LIST_ITEMS,
            filters=[eq("shopping_list_id", list_id), eq("is_bought", True)],
            order=[Order("id")],
        )
        if not rows:
            logger.info(f"No bought items on list {list_id}, nothing to transfer")
            return TransferResult(list_empty=await self._list_is_empty(list_id))

        owner_id = self.identity()
        if not owner_id:
            logger.warning(f"Transfer for list {list_id} skipped: no owner identity")
            return TransferResult(skipped=True)

        # Captured before any write so rows added meanwhile are never deleted.
        row_ids = [row["id"] for row in rows]
        totals = sum_quantities_by_product(ShoppingListLineItem.from_row(row) for row in rows)

        result = TransferResult(moved=totals, deleted_row_ids=row_ids)
        for product_id, total in totals.items():
            inserted, _ = await self.pantry.add_quantity(owner_id, product_id, total)
            if inserted:
                result.inserted += 1
            else:
                result.updated += 1

        await self.gateway.delete(LIST_ITEMS, [in_("id", row_ids)])
        result.list_empty = await self._list_is_empty(list_id)

        logger.info(
            f"Transferred {len(totals)} products from list {list_id} to pantry of {owner_id} "
            f"({result.inserted} new, {result.updated} updated, {len(row_ids)} rows removed)"
        )
        return result

    async def _list_is_empty(self, list_id: str) -> bool:
        remaining = await self.gateway.select(
            LIST_ITEMS, columns=["id"], filters=[eq("shopping_list_id", list_id)], limit=1
        )
        return not remaining
