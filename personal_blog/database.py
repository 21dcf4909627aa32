# personal_blog/database.py
import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional, Union

import aiosqlite
import asyncpg
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from personal_blog.config import DatabaseConfig
from personal_blog.models.tables import Base

logger = logging.getLogger(__name__)


def schema_statements(dialect) -> List[str]:
    """Compile idempotent DDL for every mapped table and index."""
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)))
        for index in sorted(table.indexes, key=lambda idx: idx.name):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)))
    return statements


class BlogDatabase:
    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.use_postgres = self.config.use_postgres
        self.database_path = self.config.database_path
        self.pool: Optional[asyncpg.Pool] = None
        self._initialized = False

    async def initialize(self):
        """Initialize database connection pool and schema."""
        if self._initialized:
            return

        if self.use_postgres:
            try:
                self.pool = await asyncpg.create_pool(
                    min_size=self.config.pool_min_size,
                    max_size=self.config.pool_max_size,
                    **self.config.asyncpg_params()
                )
                logger.info(f"PostgreSQL connection pool created: {self.config.host}:{self.config.port}")
            except Exception as e:
                logger.error(f"PostgreSQL pool creation failed: {e}", exc_info=True)
                raise
        else:
            directory = os.path.dirname(self.database_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        if self.config.auto_create_schema:
            await self.create_schema()

        self._initialized = True

    async def create_schema(self):
        """Create the blog tables if they do not exist yet."""
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    for statement in schema_statements(postgresql.dialect()):
                        await conn.execute(statement)
            logger.info("PostgreSQL blog database schema initialized")
        else:
            async with self.sqlite_connection() as conn:
                for statement in schema_statements(sqlite.dialect()):
                    await conn.execute(statement)
                await conn.commit()
            logger.info("SQLite blog database schema initialized")

    @asynccontextmanager
    async def sqlite_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a SQLite connection with dict-like rows and enforced foreign keys."""
        async with aiosqlite.connect(self.database_path) as conn:
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA foreign_keys = ON")
            yield conn

    def timestamp(self) -> Union[datetime, str]:
        """Current UTC time in the representation the active backend stores."""
        now = datetime.now(timezone.utc)
        if self.use_postgres:
            return now
        return now.isoformat(timespec='microseconds')

    async def close(self):
        """Close database connection pool."""
        if self.use_postgres and self.pool:
            await self.pool.close()
            logger.info("PostgreSQL connection pool closed")
        self._initialized = False
