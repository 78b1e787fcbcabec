"""CRUD statement composition tests against a recording storage double."""

from decimal import Decimal

import pytest

from jobly.db.crud import companies_crud, jobs_crud
from sqlalchemy.exc import IntegrityError

from jobly.errors import BadRequestError, NotFoundError

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

MOCKED_JOB_ROW = {
    "id": 7,
    "title": "new",
    "salary": 1000,
    "equity": Decimal("0.050"),
    "companyHandle": "c1",
}

UNIQUE_VIOLATION = IntegrityError(
    "INSERT", {}, Exception("UNIQUE constraint failed: companies.name")
)


@pytest.mark.asyncio
class TestJobsCrud:
    """Jobs CRUD statements"""

    async def test_create(self, fake_db):
        """checks the company, inserts, returns the new row"""

        fake_db.responses = [[{"handle": "c1"}], [MOCKED_JOB_ROW]]
        data = {"title": "new", "salary": 1000, "equity": "0.05", "companyHandle": "c1"}

        job = await jobs_crud.create(data, db=fake_db)

        assert job == {**MOCKED_JOB_ROW, "equity": "0.050"}
        assert fake_db.statements == [
            ("SELECT handle FROM companies WHERE handle = $1", ["c1"]),
            (
                "INSERT INTO jobs (title, salary, equity, company_handle) "
                f"VALUES ($1, $2, $3, $4) RETURNING {JOB_COLUMNS}",
                ["new", 1000, "0.05", "c1"],
            ),
        ]

    async def test_create_missing_company(self, fake_db):
        """no insert is issued when the company does not exist"""

        data = {"title": "new", "companyHandle": "nope"}

        with pytest.raises(BadRequestError, match="Company does not exist: nope"):
            await jobs_crud.create(data, db=fake_db)

        assert len(fake_db.statements) == 1
        assert fake_db.statements[0][0].startswith("SELECT handle FROM companies")

    async def test_find_all_without_filters(self, fake_db):
        """no WHERE keyword without filters"""

        fake_db.responses = [[MOCKED_JOB_ROW]]

        jobs = await jobs_crud.find_all(db=fake_db)

        assert jobs[0]["equity"] == "0.050"
        assert fake_db.statements == [
            (f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title", []),
        ]

    async def test_find_all_with_filters(self, fake_db):
        """filters become a WHERE clause with matching values"""

        await jobs_crud.find_all(
            {"hasEquity": True, "minSalary": 40000, "title": "dev"}, db=fake_db
        )

        assert fake_db.statements == [
            (
                f"SELECT {JOB_COLUMNS} FROM jobs "
                "WHERE equity > 0 AND salary >= $1 AND title ILIKE $2 ORDER BY title",
                [40000, "%dev%"],
            ),
        ]

    async def test_find_all_with_only_false_gate(self, fake_db):
        """a filter set that contributes nothing omits WHERE"""

        await jobs_crud.find_all({"hasEquity": False}, db=fake_db)

        assert "WHERE" not in fake_db.statements[0][0]

    async def test_find_all_rejects_company_filters(self, fake_db):
        """job listing only accepts job filters"""

        with pytest.raises(BadRequestError):
            await jobs_crud.find_all({"minEmployees": 3}, db=fake_db)

        assert fake_db.statements == []

    async def test_get(self, fake_db):
        """selects by id"""

        fake_db.responses = [[MOCKED_JOB_ROW]]

        job = await jobs_crud.get(7, db=fake_db)

        assert job["id"] == 7
        assert fake_db.statements == [
            (f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [7]),
        ]

    async def test_get_not_found(self, fake_db):
        """zero rows is a NotFoundError, never None"""

        with pytest.raises(NotFoundError, match="No job: 0"):
            await jobs_crud.get(0, db=fake_db)

    async def test_update(self, fake_db):
        """id takes the placeholder after the last value"""

        fake_db.responses = [[{**MOCKED_JOB_ROW, "title": "renamed"}]]

        job = await jobs_crud.update(7, {"title": "renamed", "salary": None}, db=fake_db)

        assert job["title"] == "renamed"
        assert fake_db.statements == [
            (
                'UPDATE jobs SET "title"=$1, "salary"=$2 WHERE id = $3 '
                f"RETURNING {JOB_COLUMNS}",
                ["renamed", None, 7],
            ),
        ]

    async def test_update_empty_payload(self, fake_db):
        """fails before any statement is issued"""

        with pytest.raises(BadRequestError, match="No data"):
            await jobs_crud.update(7, {}, db=fake_db)

        assert fake_db.statements == []

    async def test_update_not_found(self, fake_db):
        """zero returned rows is a NotFoundError"""

        with pytest.raises(NotFoundError):
            await jobs_crud.update(0, {"title": "x"}, db=fake_db)

    async def test_update_immutable_field(self, fake_db):
        """fields outside the mutable set are refused before any statement"""

        data = {"title": "x", "companyHandle": "c2"}

        with pytest.raises(BadRequestError, match="Cannot update job field"):
            await jobs_crud.update(7, data, db=fake_db)

        assert fake_db.statements == []

    async def test_remove(self, fake_db):
        """deletes by id"""

        fake_db.responses = [[{"id": 7}]]

        assert await jobs_crud.remove(7, db=fake_db) is None
        assert fake_db.statements == [
            ("DELETE FROM jobs WHERE id = $1 RETURNING id", [7]),
        ]

    async def test_remove_not_found(self, fake_db):
        """zero deleted rows is a NotFoundError"""

        with pytest.raises(NotFoundError, match="No job: 0"):
            await jobs_crud.remove(0, db=fake_db)


@pytest.mark.asyncio
class TestCompaniesCrud:
    """Companies CRUD statements"""

    async def test_create_duplicate(self, fake_db):
        """an existing handle is rejected before insert"""

        fake_db.responses = [[{"handle": "c1"}]]

        with pytest.raises(BadRequestError, match="Duplicate company: c1"):
            await companies_crud.create(
                {"handle": "c1", "name": "C1", "description": "d"}, db=fake_db
            )

        assert len(fake_db.statements) == 1

    async def test_create_taken_name(self, fake_db):
        """a unique constraint violation on insert is a BadRequestError"""

        fake_db.responses = [[], UNIQUE_VIOLATION]

        with pytest.raises(BadRequestError, match="Duplicate company: C1"):
            await companies_crud.create(
                {"handle": "zz", "name": "C1", "description": "d"}, db=fake_db
            )

    async def test_update_taken_name(self, fake_db):
        """a unique constraint violation on update is a BadRequestError"""

        fake_db.responses = [UNIQUE_VIOLATION]

        with pytest.raises(BadRequestError, match="Duplicate company: C2"):
            await companies_crud.update("c1", {"name": "C2"}, db=fake_db)

    async def test_update_translates_fields(self, fake_db):
        """camelCase fields map to their columns"""

        fake_db.responses = [[{"handle": "c1"}]]

        await companies_crud.update(
            "c1", {"numEmployees": 10, "logoUrl": "http://x"}, db=fake_db
        )

        sql, params = fake_db.statements[0]
        assert sql.startswith(
            'UPDATE companies SET "num_employees"=$1, "logo_url"=$2 WHERE handle = $3'
        )
        assert params == [10, "http://x", "c1"]

    async def test_get_includes_jobs(self, fake_db):
        """company lookup is followed by its jobs"""

        fake_db.responses = [
            [{"handle": "c1", "name": "C1"}],
            [MOCKED_JOB_ROW],
        ]

        company = await companies_crud.get("c1", db=fake_db)

        assert company["jobs"] == [{**MOCKED_JOB_ROW, "equity": "0.050"}]
        assert fake_db.statements[1] == (
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY id",
            ["c1"],
        )

    async def test_get_not_found_skips_jobs(self, fake_db):
        """a missing company never queries jobs"""

        with pytest.raises(NotFoundError, match="No company: nope"):
            await companies_crud.get("nope", db=fake_db)

        assert len(fake_db.statements) == 1

    async def test_find_all_filters(self, fake_db):
        """employee bounds use num_employees"""

        await companies_crud.find_all(
            {"minEmployees": 10, "maxEmployees": 100}, db=fake_db
        )

        assert fake_db.statements[0][1] == [10, 100]
        assert (
            "WHERE num_employees >= $1 AND num_employees <= $2 ORDER BY name"
            in fake_db.statements[0][0]
        )
