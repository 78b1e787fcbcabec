"""Database connection and statement execution."""

import logging
import os
import re
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import Connection, text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

# Initialize logging
logger = logging.getLogger("database")
logging.Formatter.converter = time.gmtime

PLACEHOLDER_PATTERN = re.compile(r"\$(\d+)")


def database_url_from_config(config: Dict) -> Optional[str]:
    """Get the database URL, letting DATABASE_URL override the config file."""
    return os.environ.get("DATABASE_URL") or config.get("database", {}).get("url")


def bind_positional(sql: str, params: Sequence[Any]):
    """Rewrite $1..$n placeholders into named binds understood by `text()`."""
    statement = PLACEHOLDER_PATTERN.sub(r":p\1", sql)
    return statement, {f"p{idx}": value for idx, value in enumerate(params, start=1)}


class Database:
    """Executes single parameterized statements on an async SQLAlchemy engine."""

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)

    @asynccontextmanager
    async def connection(self):
        """Provide a connection wrapped in its own transaction."""
        async with self.engine.begin() as conn:
            try:
                yield conn
            except Exception as e:
                logger.error("An error occurred during statement execution: %s", e)
                raise

    async def execute(
        self, sql: str, params: Sequence[Any] = ()
    ) -> List[Dict[str, Any]]:
        """
        Run one statement and return its rows as dicts keyed by column alias.

        Args:
            sql: Statement text using $1..$n positional placeholders.
            params: Values for the placeholders, in order.

        Returns:
            The returned rows, or an empty list for statements without rows.
        """
        statement, binds = bind_positional(sql, params)
        async with self.connection() as conn:
            result = await conn.execute(text(statement), binds)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]

    async def init_db(self) -> None:
        """Create all tables declared by the SQLModel table models."""
        async with self.engine.begin() as conn:
            await conn.run_sync(_create_all)

    async def close(self) -> None:
        """
        Close the database connection.
        This function should be called when the application shuts down.
        """
        await self.engine.dispose()


def _create_all(conn: Connection) -> None:
    # Import for side effects: registers the tables on SQLModel.metadata
    from jobly.db import models  # pylint: disable=import-outside-toplevel,unused-import

    SQLModel.metadata.create_all(conn)
