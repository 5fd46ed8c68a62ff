"""Initial migration — schema it creates matches the ORM metadata.

Invariants:
    - Index names and uniqueness agree between migration and models
    - Named unique constraints agree between migration and models
"""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import UniqueConstraint, create_engine, inspect

from sweetshop.db.base import Base
import sweetshop.models  # noqa: F401

MIGRATION = (
    Path(__file__).resolve().parents[1]
    / "alembic" / "versions" / "001_initial_schema.py"
)


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_schema", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def migrated():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            _load_migration().upgrade()
    yield inspect(engine)
    engine.dispose()


@pytest.mark.parametrize("table", ["users", "sweets"])
def test_indexes_match_models(migrated, table):
    reflected = {
        (ix["name"], bool(ix["unique"])) for ix in migrated.get_indexes(table)
    }
    declared = {
        (ix.name, bool(ix.unique)) for ix in Base.metadata.tables[table].indexes
    }
    assert reflected == declared


@pytest.mark.parametrize("table", ["users", "sweets"])
def test_unique_constraints_match_models(migrated, table):
    reflected = {
        uc["name"] for uc in migrated.get_unique_constraints(table)
    }
    declared = {
        c.name for c in Base.metadata.tables[table].constraints
        if isinstance(c, UniqueConstraint)
    }
    assert reflected == declared


def test_username_index_is_unique(migrated):
    indexes = {ix["name"]: ix for ix in migrated.get_indexes("users")}
    assert indexes["ix_users_username"]["unique"]
