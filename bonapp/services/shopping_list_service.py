"""Shopping list service: lists and their line items."""

import logging

from bonapp.gateway import DataGateway, Order, Row, eq, in_
from bonapp.gateway.collections import LIST_ITEMS, SHOPPING_LISTS
from bonapp.services.aggregation import (
    AggregatedListItem,
    ShoppingListLineItem,
    aggregate_line_items,
)
from bonapp.services.products import ProductService
from bonapp.services.quantity import parse_quantity

logger = logging.getLogger(__name__)


class ShoppingListService:
    """Service for shopping list operations."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self.products = ProductService(gateway)

    # --- Lists ---

    async def fetch_lists(self, owner_id: str) -> list[Row]:
        """Lists owned by the user, newest first."""
        return await self.gateway.select(
            SHOPPING_LISTS,
            columns=["id", "name", "owner_id", "created_at"],
            filters=[eq("owner_id", owner_id)],
            order=[Order("created_at", descending=True)],
        )

    async def get_list(self, list_id: str) -> Row | None:
        rows = await self.gateway.select(
            SHOPPING_LISTS,
            columns=["id", "name", "owner_id", "created_at"],
            filters=[eq("id", list_id)],
            limit=1,
        )
        return rows[0] if rows else None

    async def create_list(self, owner_id: str, name: str) -> Row:
        name = name.strip()
        if not name:
            raise ValueError("List name cannot be empty")
        rows = await self.gateway.insert(SHOPPING_LISTS, {"name": name, "owner_id": owner_id})
        logger.info(f"Created shopping list '{name}' for owner {owner_id}")
        return rows[0]

    async def delete_list(self, list_id: str) -> None:
        """Delete a list together with all of its line items."""
        await self.gateway.delete(LIST_ITEMS, [eq("shopping_list_id", list_id)])
        await self.gateway.delete(SHOPPING_LISTS, [eq("id", list_id)])
        logger.info(f"Deleted shopping list {list_id}")

    # --- Items ---

    async def fetch_raw_items(self, list_id: str) -> list[ShoppingListLineItem]:
        """Every stored row of the list, duplicates included."""
        rows = await self.gateway.select(
            LIST_ITEMS,
            filters=[eq("shopping_list_id", list_id)],
            order=[Order("id")],
        )
        products = await self.products.get_many(row["product_id"] for row in rows)
        return [ShoppingListLineItem.from_row(row, products.get(row["product_id"])) for row in rows]

    async def fetch_items(self, list_id: str) -> list[AggregatedListItem]:
        """The list as displayed: one entry per product."""
        return aggregate_line_items(await self.fetch_raw_items(list_id))

    async def add_item(
        self, list_id: str, product_id: int, quantity: float | str
    ) -> ShoppingListLineItem:
        """Append a new row. Existing rows of the same product are left alone."""
        amount = parse_quantity(quantity)
        products = await self.products.get_many([product_id])
        if product_id not in products:
            raise LookupError(f"Product {product_id} not found")

        rows = await self.gateway.insert(
            LIST_ITEMS,
            {
                "shopping_list_id": list_id,
                "product_id": product_id,
                "quantity": amount,
                "is_bought": False,
            },
        )
        logger.info(f"Added product {product_id} x{amount} to list {list_id}")
        return ShoppingListLineItem.from_row(rows[0], products[product_id])

    async def _product_rows(self, list_id: str, product_id: int) -> list[Row]:
        rows = await self.gateway.select(
            LIST_ITEMS,
            columns=["id", "quantity", "is_bought"],
            filters=[eq("shopping_list_id", list_id), eq("product_id", product_id)],
            order=[Order("id")],
        )
        if not rows:
            raise LookupError(f"Product {product_id} is not on list {list_id}")
        return rows

    async def update_quantity(self, list_id: str, product_id: int, quantity: float | str) -> None:
        """Set the product's total quantity, collapsing duplicate rows into one."""
        amount = parse_quantity(quantity)
        rows = await self._product_rows(list_id, product_id)

        # The kept row carries the group's bought state, not just its own.
        keep, *extra = rows
        await self.gateway.update(
            LIST_ITEMS,
            {"quantity": amount, "is_bought": all(row["is_bought"] for row in rows)},
            [eq("id", keep["id"])],
        )
        if extra:
            await self.gateway.delete(LIST_ITEMS, [in_("id", [row["id"] for row in extra])])

    async def toggle_bought(self, list_id: str, product_id: int) -> bool:
        """Flip the product's bought state; a partially bought product becomes bought."""
        rows = await self._product_rows(list_id, product_id)
        new_state = not all(row["is_bought"] for row in rows)
        await self.gateway.update(
            LIST_ITEMS,
            {"is_bought": new_state},
            [eq("shopping_list_id", list_id), eq("product_id", product_id)],
        )
        return new_state

    async def delete_item(self, list_id: str, product_id: int) -> int:
        """Remove every row of the product from the list."""
        deleted = await self.gateway.delete(
            LIST_ITEMS, [eq("shopping_list_id", list_id), eq("product_id", product_id)]
        )
        if not deleted:
            raise LookupError(f"Product {product_id} is not on list {list_id}")
        return deleted

    async def search_products(self, query: str, limit: int = 5) -> list[Row]:
        """Product suggestions for the add-item form."""
        return await self.products.search(query, limit=limit)
