""" Jobs CRUD operations."""

from typing import List

from ..database import Database
from ..models.jobs import JOB_SCHEMA
from .base_crud import BaseCrud, Record


class JobsCrud(BaseCrud):
    """Jobs CRUD operations."""

    async def find_by_company(self, handle: str, *, db: Database) -> List[Record]:
        """Get all jobs posted by a company, oldest first."""
        rows = await db.execute(
            f"SELECT {self.schema.select_list} FROM {self.schema.table} "
            "WHERE company_handle = $1 ORDER BY id",
            [handle],
        )
        return [self.to_record(row) for row in rows]


jobs_crud = JobsCrud(JOB_SCHEMA)
