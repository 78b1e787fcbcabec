"""init file for models directory."""

from .base import EntitySchema, ForeignKey, RequestSchema, validate_payload
from .company import (
    COMPANY_SCHEMA,
    Company,
    CompanyCreate,
    CompanySearch,
    CompanyUpdate,
)
from .jobs import JOB_SCHEMA, Job, JobCreate, JobSearch, JobUpdate
