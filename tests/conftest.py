"""Shared pytest fixtures for mssql-meta tests."""

import pytest

from mssql_meta.database.models import Blueprint, Key, NormalizedColumn
from tests.database.fixtures import MockConnection, create_sales_catalog


@pytest.fixture
def mock_connection():
    """Create an empty MockConnection for each test."""
    return MockConnection()


@pytest.fixture
def sales_connection():
    """MockConnection serving the organizations/users/orders catalog."""
    return create_sales_catalog()


@pytest.fixture
def users_blueprint():
    """A users table with a composite primary key and one foreign key."""
    blueprint = Blueprint("sqlsrv", "Sales", "users")
    blueprint.with_column(NormalizedColumn(name="id", type="int", size=10, scale=0))
    blueprint.with_column(NormalizedColumn(name="org_id", type="int", size=10, scale=0))
    blueprint.with_column(NormalizedColumn(name="email", type="string", nullable=True))
    blueprint.with_primary_key(Key(name="primary", columns=["id", "org_id"]))
    blueprint.with_index(Key(name="unique", index="UQ_users_email", columns=["email"]))
    blueprint.with_index(Key(name="index", index="IX_users_org", columns=["org_id"]))
    blueprint.with_relation(Key(
        name="foreign",
        columns=["org_id"],
        references=["id"],
        on=("Sales", "organizations"),
    ))
    return blueprint


@pytest.fixture
def organizations_blueprint():
    """An organizations table with a single-column primary key."""
    blueprint = Blueprint("sqlsrv", "Sales", "organizations")
    blueprint.with_column(NormalizedColumn(name="id", type="int", size=10, scale=0, autoincrement=True))
    blueprint.with_primary_key(Key(name="primary", columns=["id"]))
    return blueprint
