"""
Database connection management using asyncpg.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool, Record

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the asyncpg connection pool."""

    def __init__(self, database_url: str, application_name: str = "job-portal", **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: PostgreSQL DSN (a SQLAlchemy style ``+asyncpg`` suffix is accepted)
            application_name: Reported to the server as application_name
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url.replace("+asyncpg", "")
        self.application_name = application_name

        self.pool_config = {
            "min_size": 5,
            "max_size": 20,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 60,
            **pool_config
        }

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        if self.pool is None:
            logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
            self.pool = await asyncpg.create_pool(
                self.dsn,
                server_settings={"application_name": self.application_name},
                **self.pool_config
            )
            logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self):
        """Create a transaction context."""
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def execute(self, query: str, *args, timeout: float = None) -> str:
        """Execute a query without returning results."""
        async with self.acquire() as connection:
            return await connection.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: float = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: float = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
