"""Models for the jobs table."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, ForeignKey as SAForeignKey, String
from sqlmodel import Field, SQLModel

from jobly.utils.sql import JOB_FILTERS

from .base import EntitySchema, ForeignKey, RequestSchema


class Job(SQLModel, table=True):
    """Table model for jobs."""

    __tablename__ = "jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[Decimal] = Field(default=None, max_digits=4, decimal_places=3)
    company_handle: str = Field(
        sa_column=Column(
            String(25),
            SAForeignKey("companies.handle", ondelete="CASCADE"),
            nullable=False,
        )
    )


class JobCreate(RequestSchema):
    """Payload for creating a job."""

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[Decimal] = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25, alias="companyHandle")


class JobUpdate(RequestSchema):
    """Payload for updating a job; id and company cannot change."""

    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[Decimal] = Field(default=None, ge=0, le=1)


class JobSearch(RequestSchema):
    """Query string filters for listing jobs."""

    title: Optional[str] = Field(default=None, min_length=1)
    min_salary: Optional[int] = Field(default=None, ge=0, alias="minSalary")
    has_equity: Optional[bool] = Field(default=None, alias="hasEquity")


JOB_SCHEMA = EntitySchema(
    name="job",
    table="jobs",
    key="id",
    generated_key=True,
    columns={
        "id": "id",
        "title": "title",
        "salary": "salary",
        "equity": "equity",
        "company_handle": "companyHandle",
    },
    order_by="title",
    translation={"companyHandle": "company_handle"},
    mutable_fields=frozenset({"title", "salary", "equity"}),
    foreign_keys={
        "companyHandle": ForeignKey("Company", "companies", "handle"),
    },
    filters=JOB_FILTERS,
    decimal_fields=frozenset({"equity"}),
)
