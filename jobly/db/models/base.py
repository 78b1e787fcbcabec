"""Base pieces shared by all entity models."""

from typing import Any, Dict, FrozenSet, Mapping, NamedTuple, Type

from pydantic import ConfigDict, ValidationError
from sqlmodel import SQLModel

from jobly.errors import BadRequestError
from jobly.utils.sql import FilterRule


class ForeignKey(NamedTuple):
    """A field that must reference an existing row of another table."""

    entity: str
    table: str
    column: str


class EntitySchema(NamedTuple):
    """Declarative description of how an entity maps onto its table."""

    name: str
    table: str
    key: str
    generated_key: bool
    columns: Dict[str, str]  # physical column -> record field
    order_by: str
    translation: Dict[str, str]  # record field -> physical column
    mutable_fields: FrozenSet[str]
    foreign_keys: Dict[str, ForeignKey]
    filters: Dict[str, FilterRule]
    decimal_fields: FrozenSet[str] = frozenset()
    unique_fields: FrozenSet[str] = frozenset()  # record fields beside the key

    @property
    def select_list(self) -> str:
        """Columns to select, aliased to their record field names."""
        return ", ".join(
            column if column == field else f'{column} AS "{field}"'
            for column, field in self.columns.items()
        )

    def column_for(self, field: str) -> str:
        """Physical column behind a record field."""
        return self.translation.get(field, field)


class RequestSchema(SQLModel):
    """Base for request payload schemas; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


def validate_payload(
    schema: Type[RequestSchema], data: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Validate a request payload and return only the fields it set.

    Keys keep the order they arrived in, since that order drives the
    generated SQL.

    Raises:
        BadRequestError: listing every validation failure.
    """
    try:
        obj = schema.model_validate(dict(data or {}))
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise BadRequestError(errors) from e

    dumped = obj.model_dump(by_alias=True, exclude_unset=True)
    return {key: dumped[key] for key in data if key in dumped}
