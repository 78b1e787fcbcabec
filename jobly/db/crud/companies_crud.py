"""Companies CRUD operations."""

from typing import Any

from ..database import Database
from ..models.company import COMPANY_SCHEMA
from .base_crud import BaseCrud, Record
from .jobs_crud import jobs_crud


class CompaniesCrud(BaseCrud):
    """Companies CRUD operations."""

    async def get(self, key: Any, *, db: Database) -> Record:
        """Get a single company together with its jobs."""
        company = await super().get(key, db=db)
        company["jobs"] = await jobs_crud.find_by_company(key, db=db)
        return company


companies_crud = CompaniesCrud(COMPANY_SCHEMA)
