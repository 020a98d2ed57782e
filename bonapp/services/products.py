"""Product catalogue lookups."""

from collections.abc import Iterable

from bonapp.gateway import DataGateway, Order, Row, escape_like, ilike, in_
from bonapp.gateway.collections import PRODUCT_CATEGORIES, PRODUCTS

PRODUCT_COLUMNS = ["id", "name", "unit", "category_id"]


class ProductService:
    """Read-only access to the ``product`` collection."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    async def get_many(self, product_ids: Iterable[int]) -> dict[int, Row]:
        """Fetch products by id, keyed by id. Unknown ids are absent from the result."""
        ids = sorted(set(product_ids))
        if not ids:
            return {}
        rows = await self.gateway.select(
            PRODUCTS, columns=PRODUCT_COLUMNS, filters=[in_("id", ids)]
        )
        return {row["id"]: row for row in rows}

    async def category_names(self, category_ids: Iterable[int | None]) -> dict[int, str]:
        ids = sorted({i for i in category_ids if i is not None})
        if not ids:
            return {}
        rows = await self.gateway.select(
            PRODUCT_CATEGORIES, columns=["id", "name"], filters=[in_("id", ids)]
        )
        return {row["id"]: row["name"] for row in rows}

    async def search(self, query: str, limit: int = 5) -> list[Row]:
        """Suggest products whose name contains ``query`` (case-insensitive)."""
        trimmed = query.strip()
        if not trimmed:
            return []
        return await self.gateway.select(
            PRODUCTS,
            columns=PRODUCT_COLUMNS,
            filters=[ilike("name", f"%{escape_like(trimmed)}%")],
            order=[Order("name")],
            limit=limit,
        )
