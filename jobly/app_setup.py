"""This module contains the functions to setup logging, the database and the web application."""

import logging
from logging.config import dictConfig
from typing import Dict

from aiohttp import web

from jobly.api import DB_KEY, company_routes, error_middleware, job_routes
from jobly.db.database import Database, database_url_from_config
from jobly.logfiles.logging_config import LEVEL_COLORS, get_log_config

logger = logging.getLogger(__name__)


# Setup Logging
def setup_logging(config):
    """Setup the logging configuration based on the specified configuration."""
    dictConfig(get_log_config(config.get("logging", {})))


original_log_record_factory = logging.getLogRecordFactory()


def record_factory(*args, **kwargs):
    """Factory function for creating log records."""
    record = original_log_record_factory(*args, **kwargs)
    record.level_color = LEVEL_COLORS[min(record.levelno // 10, len(LEVEL_COLORS) - 1)]
    record.end_color = "\033[0m"
    return record


# Setup Database
def setup_database(config: Dict) -> Database:
    """Create the Database for the configured URL."""
    url = database_url_from_config(config)
    logger.info("Using database %s", url.split("@")[-1])
    return Database(url)


# Setup Web Application
def create_app(db: Database) -> web.Application:
    """Build the aiohttp application serving companies and jobs."""
    app = web.Application(middlewares=[error_middleware])
    app[DB_KEY] = db
    app.add_routes(company_routes)
    app.add_routes(job_routes)

    async def close_database(app: web.Application) -> None:
        await app[DB_KEY].close()

    app.on_cleanup.append(close_database)
    return app
