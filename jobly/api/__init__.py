"""HTTP routes, middleware and helpers"""

from .companies import routes as company_routes
from .jobs import routes as job_routes
from .middleware import DB_KEY, error_middleware
