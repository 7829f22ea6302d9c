"""Shared fixtures: the Employee entity stored in memory and in SQLite, and the operator registries."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from metarest.metadata import EntityMetadata, FieldDataType, FieldMetadata
from metarest.relational.operators import build_default_sql_registry
from metarest.sequential import InMemoryIndexedFile, InMemoryIndexedFileSystem
from metarest.sequential.operators import build_default_registry
from metarest.values import coerce_record

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

EMPLOYEE_FIELDS = (
    FieldMetadata(
        name="Id",
        type=FieldDataType.NUMERIC,
        size=10,
        is_primary_key=True,
        is_required=True,
    ),
    FieldMetadata(name="Name", type=FieldDataType.STRING, size=50),
    FieldMetadata(name="HireDate", type=FieldDataType.DATE),
    FieldMetadata(name="Salary", type=FieldDataType.NUMERIC, size=10, scale=2),
)

EMPLOYEE = EntityMetadata(name="Employee", description="Staff", fields=EMPLOYEE_FIELDS)

EMPLOYEES = [
    {"Id": 1, "Name": "Anna", "HireDate": date(2020, 1, 15), "Salary": "3100.50"},
    {"Id": 2, "Name": "Brian", "HireDate": date(2021, 3, 1), "Salary": "2800.00"},
    {"Id": 3, "Name": "dan", "HireDate": date(2019, 7, 9), "Salary": "4000.00"},
    {"Id": 4, "Name": "Joan", "HireDate": date(2022, 11, 30), "Salary": "2500.25"},
    {"Id": 5, "Name": "Zoe", "HireDate": date(2018, 5, 20), "Salary": "5200.00"},
]


@pytest.fixture
def employee_metadata() -> EntityMetadata:
    return EMPLOYEE


@pytest.fixture
def employee_file() -> InMemoryIndexedFile:
    return InMemoryIndexedFile(EMPLOYEE, EMPLOYEES)


@pytest.fixture
def file_system(employee_file: InMemoryIndexedFile) -> InMemoryIndexedFileSystem:
    return InMemoryIndexedFileSystem([employee_file])


@pytest.fixture
def registry():
    """Default record operator registry."""
    return build_default_registry()


@pytest.fixture
def sql_registry():
    """Default SQLAlchemy operator registry."""
    return build_default_sql_registry()


@pytest.fixture
def employee_records() -> list[dict]:
    """EMPLOYEES coerced to their field types, as a storage adapter returns them."""
    return [coerce_record(r, EMPLOYEE) for r in EMPLOYEES]


EMPLOYEE_DDL = (
    'CREATE TABLE "Employee" ('
    '"Id" INTEGER PRIMARY KEY, '
    '"Name" VARCHAR(50), '
    '"HireDate" DATE, '
    '"Salary" NUMERIC(10, 2))'
)

EMPLOYEE_INSERT = (
    'INSERT INTO "Employee" ("Id", "Name", "HireDate", "Salary") '
    "VALUES (:Id, :Name, :HireDate, :Salary)"
)


@pytest.fixture
async def employee_engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite database holding the EMPLOYEES rows."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.execute(text(EMPLOYEE_DDL))
        await conn.execute(
            text(EMPLOYEE_INSERT),
            [
                {**row, "HireDate": row["HireDate"].isoformat()}
                for row in EMPLOYEES
            ],
        )
    yield engine
    await engine.dispose()
