"""Pytest configuration and fixtures."""

import asyncio
import itertools
import os
import re

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bonapp.database import Base, get_db
from bonapp.gateway import DataGateway, Filter, GatewayError, Order, Row
from bonapp.gateway.sql import SqlGateway
from bonapp.main import app
from bonapp.models import Product, ProductCategory
from bonapp.services.auth import create_access_token

OWNER_ID = "0b6f3c1e-5a8e-4d47-9b71-2f1f2d7c9a10"
OTHER_OWNER_ID = "7d3e9a55-1c02-4b8f-8e3a-6a4b0f9e2c31"


class AuthHeaders(dict):
    """Dict subclass that also stores owner_id."""

    def __init__(self, *args, owner_id: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.owner_id = owner_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("TEST_DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer token for the test owner, as the identity provider would issue it."""
    token = create_access_token(OWNER_ID)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, owner_id=OWNER_ID)


@pytest.fixture
def other_auth_headers():
    token = create_access_token(OTHER_OWNER_ID)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, owner_id=OTHER_OWNER_ID)


@pytest.fixture
def products(db):
    """Small product catalogue: name -> id."""
    dry = ProductCategory(id=1, name="Suche")
    dairy = ProductCategory(id=2, name="Nabiał")
    db.add_all([dry, dairy])
    db.flush()
    catalogue = [
        Product(id=7, name="Makaron", unit="g", category_id=dry.id),
        Product(id=8, name="Ryż", unit="g", category_id=dry.id),
        Product(id=9, name="Mleko", unit="ml", category_id=dairy.id),
        Product(id=10, name="Masło", unit="g", category_id=dairy.id),
        Product(id=11, name="Makaron razowy", unit="g", category_id=dry.id),
    ]
    db.add_all(catalogue)
    db.commit()
    return {p.name: p.id for p in catalogue}


@pytest.fixture
def sql_gateway(db):
    return SqlGateway(db)


def like_to_regex(pattern: str) -> str:
    """Translate a LIKE pattern with backslash escapes into a regex."""
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


class InMemoryGateway(DataGateway):
    """Gateway fake backed by dicts.

    Every call yields to the event loop once, like a network round trip, so
    concurrent tasks interleave between calls. ``fail_on`` holds
    ``(operation, collection)`` pairs that raise ``GatewayError``.
    """

    def __init__(self, tables: dict[str, list[Row]] | None = None):
        self.tables: dict[str, list[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[tuple[str, str]] = set()
        self._ids = itertools.count(1000)

    @property
    def writes(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] != "select"]

    async def _record(self, operation: str, collection: str) -> None:
        await asyncio.sleep(0)
        self.calls.append((operation, collection))
        if (operation, collection) in self.fail_on:
            raise GatewayError(f"{operation} on '{collection}' failed", collection)

    @staticmethod
    def _matches(row: Row, filters: list[Filter] | None) -> bool:
        for f in filters or []:
            value = row.get(f.column)
            if f.op == "eq" and value != f.value:
                return False
            if f.op == "neq" and value == f.value:
                return False
            if f.op == "lte" and (value is None or value > f.value):
                return False
            if f.op == "in" and value not in f.value:
                return False
            if f.op == "ilike" and not re.fullmatch(
                like_to_regex(f.value), str(value), re.IGNORECASE | re.DOTALL
            ):
                return False
        return True

    async def select(
        self,
        collection: str,
        columns: list[str] | None = None,
        filters: list[Filter] | None = None,
        order: list[Order] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        await self._record("select", collection)
        rows = [dict(r) for r in self.tables.get(collection, []) if self._matches(r, filters)]
        for o in reversed(order or []):
            rows.sort(key=lambda r: r.get(o.column), reverse=o.descending)
        if columns:
            rows = [{c: r.get(c) for c in columns} for r in rows]
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(self, collection: str, rows: Row | list[Row]) -> list[Row]:
        await self._record("insert", collection)
        stored = []
        for row in [rows] if isinstance(rows, dict) else rows:
            new_row = {"id": next(self._ids), **row}
            self.tables.setdefault(collection, []).append(new_row)
            stored.append(dict(new_row))
        return stored

    async def update(self, collection: str, values: Row, filters: list[Filter]) -> int:
        await self._record("update", collection)
        matched = [r for r in self.tables.get(collection, []) if self._matches(r, filters)]
        for row in matched:
            row.update(values)
        return len(matched)

    async def delete(self, collection: str, filters: list[Filter]) -> int:
        await self._record("delete", collection)
        rows = self.tables.get(collection, [])
        kept = [r for r in rows if not self._matches(r, filters)]
        self.tables[collection] = kept
        return len(rows) - len(kept)


@pytest.fixture
def memory_gateway():
    return InMemoryGateway()
