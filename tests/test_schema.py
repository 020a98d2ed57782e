"""Schema tests: models and migrations build on an empty database."""

import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from bonapp import models  # noqa: F401
from bonapp.database import Base

VERSIONS_DIR = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def load_migrations():
    """Migration modules in upgrade order."""
    by_parent = {}
    for path in VERSIONS_DIR.glob("*.py"):
        spec = importlib.util.spec_from_file_location(f"migration_{path.stem}", path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        by_parent[module.down_revision] = module

    ordered, current = [], None
    while current in by_parent:
        module = by_parent[current]
        ordered.append(module)
        current = module.revision
    assert len(ordered) == len(by_parent), "migration history is not a single chain"
    return ordered


def schema_of(engine):
    inspector = inspect(engine)
    return {
        table: sorted(index["name"] for index in inspector.get_indexes(table))
        for table in inspector.get_table_names()
        if table != "alembic_version"
    }


def test_models_create_on_empty_database():
    engine = create_engine("sqlite://")

    Base.metadata.create_all(bind=engine)

    assert set(inspect(engine).get_table_names()) == set(Base.metadata.tables)


def test_index_names_are_unique_across_tables():
    names = [index.name for table in Base.metadata.tables.values() for index in table.indexes]
    assert len(names) == len(set(names))


def test_migrations_build_the_model_schema():
    from_models = create_engine("sqlite://")
    Base.metadata.create_all(bind=from_models)

    from_migrations = create_engine("sqlite://")
    with from_migrations.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            for migration in load_migrations():
                migration.upgrade()

    assert schema_of(from_migrations) == schema_of(from_models)


def test_migrations_downgrade_to_empty():
    engine = create_engine("sqlite://")
    migrations = load_migrations()
    with engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            for migration in migrations:
                migration.upgrade()
            for migration in reversed(migrations):
                migration.downgrade()

    assert schema_of(engine) == {}
