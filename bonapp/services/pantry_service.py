"""Pantry service for household stock."""

import logging
from typing import Any

from bonapp.gateway import DataGateway, Row, eq
from bonapp.gateway.collections import PANTRY
from bonapp.services.products import ProductService
from bonapp.services.quantity import parse_quantity

logger = logging.getLogger(__name__)


class PantryService:
    """Service for pantry-related operations."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self.products = ProductService(gateway)

    async def fetch_entries(self, owner_id: str) -> list[dict[str, Any]]:
        """List the owner's pantry with product details, grouped by category.

        Entries are sorted by category name, then product name; products
        without a category come last.

        Returns:
            [{"id", "product_id", "quantity", "product_name", "unit",
              "category_id", "category_name"}, ...]
        """
        rows = await self.gateway.select(
            PANTRY,
            columns=["id", "user_id", "product_id", "quantity"],
            filters=[eq("user_id", owner_id)],
        )
        products = await self.products.get_many(row["product_id"] for row in rows)
        categories = await self.products.category_names(
            p.get("category_id") for p in products.values()
        )

        entries = []
        for row in rows:
            product = products.get(row["product_id"], {})
            entries.append(
                {
                    "id": row["id"],
                    "product_id": row["product_id"],
                    "quantity": float(row["quantity"]),
                    "product_name": product.get("name") or "",
                    "unit": product.get("unit"),
                    "category_id": product.get("category_id"),
                    "category_name": categories.get(product.get("category_id")),
                }
            )
        return sorted(
            entries,
            key=lambda e: (
                e["category_name"] is None,
                (e["category_name"] or "").lower(),
                e["product_name"].lower(),
                e["id"],
            ),
        )

    async def find_entry(self, owner_id: str, product_id: int) -> Row | None:
        rows = await self.gateway.select(
            PANTRY,
            columns=["id", "user_id", "product_id", "quantity"],
            filters=[eq("user_id", owner_id), eq("product_id", product_id)],
            limit=1,
        )
        return rows[0] if rows else None

    async def stocked_product_ids(self, owner_id: str) -> set[int]:
        """Products the owner has any stock of."""
        rows = await self.gateway.select(
            PANTRY, columns=["product_id", "quantity"], filters=[eq("user_id", owner_id)]
        )
        return {row["product_id"] for row in rows if row["quantity"] and row["quantity"] > 0}

    async def add_quantity(self, owner_id: str, product_id: int, amount: float) -> tuple[bool, Row]:
        """Additive upsert of one (owner, product) entry.

        Reads the existing entry first; if there is one its quantity is
        increased by ``amount``, otherwise a new entry is inserted.

        Returns:
            (inserted, row) where ``inserted`` is False when an entry was updated.
        """
        existing = await self.find_entry(owner_id, product_id)
        if existing:
            new_quantity = float(existing["quantity"]) + amount
            await self.gateway.update(
                PANTRY,
                {"quantity": new_quantity},
                [eq("id", existing["id"]), eq("user_id", owner_id)],
            )
            return False, {**existing, "quantity": new_quantity}

        rows = await self.gateway.insert(
            PANTRY, {"user_id": owner_id, "product_id": product_id, "quantity": amount}
        )
        return True, rows[0]

    async def add_entry(self, owner_id: str, product_id: int, quantity: float | str) -> Row:
        """Add stock by hand, merging into an existing entry for the product."""
        amount = parse_quantity(quantity)
        products = await self.products.get_many([product_id])
        if product_id not in products:
            raise LookupError(f"Product {product_id} not found")

        inserted, row = await self.add_quantity(owner_id, product_id, amount)
        logger.info(
            f"{'Added' if inserted else 'Topped up'} pantry product {product_id} "
            f"for owner {owner_id}: {row['quantity']}"
        )
        return row

    async def set_quantity(self, owner_id: str, entry_id: int, quantity: float | str) -> None:
        """Overwrite an entry's quantity."""
        amount = parse_quantity(quantity)
        updated = await self.gateway.update(
            PANTRY, {"quantity": amount}, [eq("id", entry_id), eq("user_id", owner_id)]
        )
        if not updated:
            raise LookupError(f"Pantry entry {entry_id} not found")

    async def delete_entry(self, owner_id: str, entry_id: int) -> None:
        deleted = await self.gateway.delete(PANTRY, [eq("id", entry_id), eq("user_id", owner_id)])
        if not deleted:
            raise LookupError(f"Pantry entry {entry_id} not found")
