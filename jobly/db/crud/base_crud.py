"""Base CRUD class for all entities."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from jobly.errors import BadRequestError, NotFoundError
from jobly.utils.sql import build_filter_clause, build_set_clause

from ..database import Database
from ..models.base import EntitySchema, ForeignKey

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class BaseCrud:
    """Base CRUD class composing parameterized SQL from an EntitySchema."""

    def __init__(self, schema: EntitySchema):
        """
        CRUD object with default methods to Create, Read, Update, Delete (CRUD).
        **Parameters**
        * `schema`: The EntitySchema describing the entity's table
        """
        self.schema = schema

    @property
    def key_field(self) -> str:
        """Record field holding the entity's key."""
        return self.schema.columns[self.schema.key]

    async def create(self, data: Mapping[str, Any], *, db: Database) -> Record:
        """
        Insert a new row and return it as a record.

        Raises:
            BadRequestError: if the payload is empty, a referenced row does not
                exist, or a natural key is already taken.
        """
        schema = self.schema
        if not data:
            raise BadRequestError("No data")

        for field, reference in schema.foreign_keys.items():
            if field in data:
                await self._ensure_reference(reference, data[field], db)

        if not schema.generated_key and self.key_field in data:
            duplicate = await db.execute(
                f"SELECT {schema.key} FROM {schema.table} WHERE {schema.key} = $1",
                [data[self.key_field]],
            )
            if duplicate:
                raise BadRequestError(
                    f"Duplicate {schema.name}: {data[self.key_field]}"
                )

        columns = ", ".join(schema.column_for(field) for field in data)
        placeholders = ", ".join(f"${idx}" for idx in range(1, len(data) + 1))
        try:
            rows = await db.execute(
                f"INSERT INTO {schema.table} ({columns}) VALUES ({placeholders}) "
                f"RETURNING {schema.select_list}",
                list(data.values()),
            )
        except IntegrityError as e:
            raise self._duplicate_error(data) from e
        record = self.to_record(rows[0])
        logger.info("Created %s %s", schema.name, record[self.key_field])
        return record

    async def find_all(
        self, filters: Optional[Mapping[str, Any]] = None, *, db: Database
    ) -> List[Record]:
        """Get all records matching the optional search filters."""
        schema = self.schema
        where = ""
        values: List[Any] = []
        if filters:
            fragment = build_filter_clause(filters, schema.filters)
            if fragment.clause:
                where = f" WHERE {fragment.clause}"
                values = fragment.values

        rows = await db.execute(
            f"SELECT {schema.select_list} FROM {schema.table}{where} "
            f"ORDER BY {schema.order_by}",
            values,
        )
        return [self.to_record(row) for row in rows]

    async def get(self, key: Any, *, db: Database) -> Record:
        """Get a single record by key, raising NotFoundError if absent."""
        schema = self.schema
        rows = await db.execute(
            f"SELECT {schema.select_list} FROM {schema.table} "
            f"WHERE {schema.key} = $1",
            [key],
        )
        if not rows:
            raise NotFoundError(f"No {schema.name}: {key}")
        return self.to_record(rows[0])

    async def update(
        self, key: Any, data: Mapping[str, Any], *, db: Database
    ) -> Record:
        """
        Partially update a row. Only the fields present in `data` change.

        Raises:
            BadRequestError: if the payload is empty, names a field that
                cannot change, or takes a unique value already in use.
            NotFoundError: if no row has the key.
        """
        schema = self.schema
        frozen = [field for field in data if field not in schema.mutable_fields]
        if frozen:
            raise BadRequestError(f"Cannot update {schema.name} field: {frozen[0]}")

        set_cols, values = build_set_clause(data, schema.translation)
        key_idx = len(values) + 1

        try:
            rows = await db.execute(
                f"UPDATE {schema.table} SET {set_cols} "
                f"WHERE {schema.key} = ${key_idx} "
                f"RETURNING {schema.select_list}",
                [*values, key],
            )
        except IntegrityError as e:
            raise self._duplicate_error(data) from e
        if not rows:
            raise NotFoundError(f"No {schema.name}: {key}")
        return self.to_record(rows[0])

    async def remove(self, key: Any, *, db: Database) -> None:
        """Remove a record by key, raising NotFoundError if absent."""
        schema = self.schema
        rows = await db.execute(
            f"DELETE FROM {schema.table} WHERE {schema.key} = $1 "
            f"RETURNING {schema.key}",
            [key],
        )
        if not rows:
            raise NotFoundError(f"No {schema.name}: {key}")
        logger.info("Removed %s %s", schema.name, key)

    async def get_count(self, *, db: Database) -> int:
        """Get a count of records."""
        rows = await db.execute(
            f"SELECT COUNT(*) AS count FROM {self.schema.table}"
        )
        return rows[0]["count"]

    def to_record(self, row: Mapping[str, Any]) -> Record:
        """Shape a returned row; decimal fields are rendered as strings."""
        record = dict(row)
        for field in self.schema.decimal_fields:
            if record.get(field) is not None:
                record[field] = str(record[field])
        return record

    def _duplicate_error(self, data: Mapping[str, Any]) -> BadRequestError:
        fields = self.schema.unique_fields or {self.key_field}
        taken = [str(value) for field, value in data.items() if field in fields]
        return BadRequestError(f"Duplicate {self.schema.name}: {', '.join(taken)}")

    @staticmethod
    async def _ensure_reference(reference: ForeignKey, value: Any, db: Database):
        rows = await db.execute(
            f"SELECT {reference.column} FROM {reference.table} "
            f"WHERE {reference.column} = $1",
            [value],
        )
        if not rows:
            raise BadRequestError(f"{reference.entity} does not exist: {value}")
