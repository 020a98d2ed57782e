"""Request/response contract for the remote data store.

Services never talk to a database or HTTP client directly; they receive a
``DataGateway`` and issue per-collection queries against it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Literal

Row = dict[str, Any]
FilterOp = Literal["eq", "neq", "lte", "in", "ilike"]


class GatewayError(Exception):
    """A query or mutation against the data store failed."""

    def __init__(self, message: str, collection: str | None = None):
        super().__init__(message)
        self.message = message
        self.collection = collection


@dataclass(frozen=True)
class Filter:
    """A single column predicate. Multiple filters are ANDed."""

    column: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


def in_(column: str, values) -> Filter:
    return Filter(column, "in", list(values))


def ilike(column: str, pattern: str) -> Filter:
    """Case-insensitive LIKE; ``%`` and ``_`` are wildcards, ``\\`` escapes them."""
    return Filter(column, "ilike", pattern)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DataGateway(ABC):
    """Executes filtered queries and mutations against named collections."""

    @abstractmethod
    async def select(
        self,
        collection: str,
        columns: list[str] | None = None,
        filters: list[Filter] | None = None,
        order: list[Order] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        """Return matching rows as plain dicts (all columns when ``columns`` is None)."""

    @abstractmethod
    async def insert(self, collection: str, rows: Row | list[Row]) -> list[Row]:
        """Insert one or more rows and return them as stored (with generated ids)."""

    @abstractmethod
    async def update(self, collection: str, values: Row, filters: list[Filter]) -> int:
        """Update matching rows, returning how many were affected."""

    @abstractmethod
    async def delete(self, collection: str, filters: list[Filter]) -> int:
        """Delete matching rows, returning how many were removed."""

    @staticmethod
    def _require_filters(collection: str, filters: list[Filter], action: str) -> None:
        # Unfiltered bulk mutations are never issued by the services.
        if not filters:
            raise GatewayError(f"Refusing to {action} '{collection}' without filters", collection)
