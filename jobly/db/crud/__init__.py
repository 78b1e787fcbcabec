""" This module is used to import all the crud modules in the db """

from .companies_crud import companies_crud
from .jobs_crud import jobs_crud
