"""Pytest fixtures for tests"""

import sqlite3
from decimal import Decimal

import pytest
from aiohttp import test_utils

from jobly.app_setup import create_app
from jobly.db.database import Database

# Postgres takes Decimal for NUMERIC columns; teach sqlite the same
sqlite3.register_adapter(Decimal, str)

MOCKED_COMPANIES = [
    ("c1", "C1", "Desc1", 1, "http://c1.img"),
    ("c2", "C2", "Desc2", 2, "http://c2.img"),
    ("c3", "C3", "Desc3", 3, "http://c3.img"),
]

MOCKED_JOBS = [
    ("j1", 100, "0.1", "c1"),
    ("j2", 200, "0.2", "c1"),
    ("j3", 300, "0", "c1"),
    ("j4", None, None, "c2"),
]


class FakeDatabase:
    """Records executed statements and replays queued result rows."""

    def __init__(self):
        self.responses = []
        self.statements = []

    async def execute(self, sql, params=()):
        """Record the statement and return (or raise) the next queued response."""
        self.statements.append((sql, list(params)))
        if not self.responses:
            return []
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_db():
    """Storage double for statement-level assertions"""
    return FakeDatabase()


@pytest.fixture
async def db(tmp_path):
    """Empty sqlite database with the jobly tables created"""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'jobly_test.db'}")
    await database.init_db()
    yield database
    await database.close()


@pytest.fixture
async def seeded_db(db):
    """Database holding three companies and four jobs"""
    for company in MOCKED_COMPANIES:
        await db.execute(
            "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
            "VALUES ($1, $2, $3, $4, $5)",
            company,
        )
    for job in MOCKED_JOBS:
        await db.execute(
            "INSERT INTO jobs (title, salary, equity, company_handle) "
            "VALUES ($1, $2, $3, $4)",
            job,
        )
    return db


@pytest.fixture
async def client(seeded_db):
    """HTTP client bound to an app serving the seeded database"""
    async with test_utils.TestClient(
        test_utils.TestServer(create_app(seeded_db))
    ) as test_client:
        yield test_client
