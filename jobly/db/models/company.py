"""SQL model for companies"""

from typing import Optional

from sqlmodel import Field, SQLModel

from jobly.utils.sql import COMPANY_FILTERS

from .base import EntitySchema, RequestSchema


class Company(SQLModel, table=True):
    """Table model for companies."""

    __tablename__ = "companies"

    handle: str = Field(primary_key=True, max_length=25)
    name: str = Field(unique=True)
    num_employees: Optional[int] = Field(default=None, ge=0)
    description: str
    logo_url: Optional[str] = None


class CompanyCreate(RequestSchema):
    """Payload for creating a company."""

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(default=None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")


class CompanyUpdate(RequestSchema):
    """Payload for updating a company; the handle cannot change."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(default=None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")


class CompanySearch(RequestSchema):
    """Query string filters for listing companies."""

    name: Optional[str] = Field(default=None, min_length=1)
    min_employees: Optional[int] = Field(default=None, ge=0, alias="minEmployees")
    max_employees: Optional[int] = Field(default=None, ge=0, alias="maxEmployees")


COMPANY_SCHEMA = EntitySchema(
    name="company",
    table="companies",
    key="handle",
    generated_key=False,
    columns={
        "handle": "handle",
        "name": "name",
        "description": "description",
        "num_employees": "numEmployees",
        "logo_url": "logoUrl",
    },
    order_by="name",
    translation={"numEmployees": "num_employees", "logoUrl": "logo_url"},
    mutable_fields=frozenset({"name", "description", "numEmployees", "logoUrl"}),
    foreign_keys={},
    filters=COMPANY_FILTERS,
    unique_fields=frozenset({"name"}),
)
