"""Gateway implementation over the local SQLAlchemy schema."""

import logging
from typing import Any

from sqlalchemy import Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bonapp import models  # noqa: F401  (registers tables on Base.metadata)
from bonapp.database import Base
from bonapp.gateway.base import DataGateway, Filter, GatewayError, Order, Row

logger = logging.getLogger(__name__)


class SqlGateway(DataGateway):
    """Runs gateway calls as SQLAlchemy Core statements on a session."""

    def __init__(self, db: Session):
        self.db = db

    def _table(self, collection: str) -> Table:
        table = Base.metadata.tables.get(collection)
        if table is None:
            raise GatewayError(f"Unknown collection '{collection}'", collection)
        return table

    def _column(self, table: Table, name: str):
        try:
            return table.c[name]
        except KeyError:
            raise GatewayError(f"Unknown column '{name}' on '{table.name}'", table.name) from None

    def _where(self, table: Table, filters: list[Filter] | None) -> list[Any]:
        clauses = []
        for f in filters or []:
            column = self._column(table, f.column)
            if f.op == "eq":
                clauses.append(column.is_(None) if f.value is None else column == f.value)
            elif f.op == "neq":
                clauses.append(column.is_not(None) if f.value is None else column != f.value)
            elif f.op == "lte":
                clauses.append(column <= f.value)
            elif f.op == "in":
                clauses.append(column.in_(f.value))
            elif f.op == "ilike":
                clauses.append(column.ilike(f.value, escape="\\"))
            else:
                raise GatewayError(f"Unsupported filter operator '{f.op}'", table.name)
        return clauses

    def _fail(self, collection: str, action: str, exc: SQLAlchemyError) -> GatewayError:
        self.db.rollback()
        logger.error(f"{action} on '{collection}' failed: {exc}")
        reason = exc.__class__.__name__
        return GatewayError(f"Could not {action} '{collection}': {reason}", collection)

    async def select(
        self,
        collection: str,
        columns: list[str] | None = None,
        filters: list[Filter] | None = None,
        order: list[Order] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        table = self._table(collection)
        selected = [self._column(table, c) for c in columns] if columns else [table]
        stmt = select(*selected).where(*self._where(table, filters))
        for o in order or []:
            column = self._column(table, o.column)
            stmt = stmt.order_by(column.desc() if o.descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise self._fail(collection, "read", e) from e
        return [dict(row) for row in result.mappings().all()]

    async def insert(self, collection: str, rows: Row | list[Row]) -> list[Row]:
        table = self._table(collection)
        pending = [rows] if isinstance(rows, dict) else list(rows)
        primary_key = list(table.primary_key.columns)

        try:
            keys = []
            for row in pending:
                result = self.db.execute(table.insert().values(**row))
                keys.append(tuple(result.inserted_primary_key))
            self.db.commit()

            inserted = []
            for key in keys:
                clauses = [column == value for column, value in zip(primary_key, key, strict=True)]
                stored = self.db.execute(select(table).where(*clauses)).mappings().one()
                inserted.append(dict(stored))
        except SQLAlchemyError as e:
            raise self._fail(collection, "insert into", e) from e
        return inserted

    async def update(self, collection: str, values: Row, filters: list[Filter]) -> int:
        self._require_filters(collection, filters, "update")
        table = self._table(collection)
        stmt = table.update().where(*self._where(table, filters)).values(**values)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(collection, "update", e) from e
        return result.rowcount

    async def delete(self, collection: str, filters: list[Filter]) -> int:
        self._require_filters(collection, filters, "delete from")
        table = self._table(collection)
        stmt = table.delete().where(*self._where(table, filters))
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(collection, "delete from", e) from e
        return result.rowcount
