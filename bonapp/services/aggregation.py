"""Merging of duplicate shopping list rows.

A product added to the same list twice produces two ``product_on_list`` rows.
They stay separate in storage and are collapsed here for display and for the
pantry transfer.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ShoppingListLineItem:
    """One raw ``product_on_list`` row, optionally enriched with product data."""

    id: int
    shopping_list_id: str
    product_id: int
    quantity: float
    is_bought: bool
    product_name: str = ""
    product_category_id: int | None = None
    unit: str | None = None

    @classmethod
    def from_row(
        cls, row: Mapping[str, Any], product: Mapping[str, Any] | None = None
    ) -> "ShoppingListLineItem":
        product = product or {}
        return cls(
            id=row["id"],
            shopping_list_id=str(row["shopping_list_id"]),
            product_id=int(row["product_id"]),
            quantity=float(row["quantity"]),
            is_bought=bool(row["is_bought"]),
            product_name=product.get("name") or "",
            product_category_id=product.get("category_id"),
            unit=product.get("unit"),
        )


@dataclass
class AggregatedListItem:
    """Display entry for all rows of one product on a list. Never persisted."""

    product_id: int
    total_quantity: float
    all_bought: bool
    display_name: str
    unit: str | None = None
    category_id: int | None = None
    row_ids: list[int] = field(default_factory=list)


def aggregate_line_items(items: Iterable[ShoppingListLineItem]) -> list[AggregatedListItem]:
    """Collapse raw rows into one entry per product id.

    Quantities are summed, the bought flag is true only when every row is
    bought. Not-bought entries come first, each partition sorted by name.
    """
    groups: dict[int, AggregatedListItem] = {}

    for item in items:
        entry = groups.get(item.product_id)
        if entry is None:
            groups[item.product_id] = AggregatedListItem(
                product_id=item.product_id,
                total_quantity=item.quantity,
                all_bought=item.is_bought,
                display_name=item.product_name,
                unit=item.unit,
                category_id=item.product_category_id,
                row_ids=[item.id],
            )
            continue

        entry.total_quantity += item.quantity
        entry.all_bought = entry.all_bought and item.is_bought
        entry.row_ids.append(item.id)
        if not entry.display_name and item.product_name:
            entry.display_name = item.product_name
        if entry.unit is None:
            entry.unit = item.unit
        if entry.category_id is None:
            entry.category_id = item.product_category_id

    return sorted(
        groups.values(),
        key=lambda e: (e.all_bought, e.display_name.lower(), e.product_id),
    )


def sum_quantities_by_product(items: Iterable[ShoppingListLineItem]) -> dict[int, float]:
    """Total quantity per product id, in order of first appearance."""
    totals: dict[int, float] = {}
    for item in items:
        totals[item.product_id] = totals.get(item.product_id, 0.0) + item.quantity
    return totals
