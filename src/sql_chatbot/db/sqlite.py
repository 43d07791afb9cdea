from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sql_chatbot.errors import DatabaseUnavailableError, ExecutionError
from sql_chatbot.models.domain import QueryResult, SchemaEntry

logger = structlog.get_logger()


def _json_safe(value: Any) -> Any:
    # BLOB columns come back as bytes; render them the way a Node Buffer serializes
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {"type": "Buffer", "data": list(bytes(value))}
    return value


class SqliteBackend:
    """SQLite database backend using SQLAlchemy async + aiosqlite.

    The engine is created by ``connect()`` during app startup and disposed by
    ``close()`` on shutdown. SQLite serializes access to the file itself, so
    requests share the engine without further locking.
    """

    def __init__(self, url: str, max_rows: int = 1000) -> None:
        self._url = url
        self._max_rows = max_rows
        self._engine: AsyncEngine | None = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        engine = create_async_engine(self._url, echo=False)
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            await engine.dispose()
            raise
        self._engine = engine
        logger.info("database_connected", url=self._url)

    async def close(self) -> None:
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            logger.info("database_closed", url=self._url)

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseUnavailableError("Database connection unavailable")
        return self._engine

    async def ping(self) -> bool:
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("database_ping_failed", error=str(e))
            return False
        return True

    async def execute_query(self, sql: str) -> QueryResult:
        """Run SQL that already passed validation and return at most max_rows rows.

        ``truncated`` is set whenever the row limit is reached.
        """
        engine = self._require_engine()
        try:
            async with engine.connect() as conn:
                # Raw driver execution: no bind-parameter parsing of ":name" in literals
                result = await conn.exec_driver_sql(sql)
                if result.returns_rows:
                    rows = [
                        {key: _json_safe(value) for key, value in row._mapping.items()}
                        for row in result.fetchmany(self._max_rows)
                    ]
                else:
                    rows = []
        except DBAPIError as e:
            message = str(e.orig) if e.orig is not None else str(e)
            logger.error("query_execution_failed", sql=sql, error=message)
            raise ExecutionError("Database query failed", details=message) from e

        truncated = len(rows) >= self._max_rows
        logger.info("query_executed", row_count=len(rows), truncated=truncated)
        return QueryResult(results=rows, count=len(rows), truncated=truncated)

    async def get_schema(self) -> list[SchemaEntry]:
        engine = self._require_engine()
        try:
            async with engine.connect() as conn:
                result = await conn.execute(
                    text("SELECT name, sql FROM sqlite_master WHERE type='table'")
                )
                rows = result.fetchall()
        except DBAPIError as e:
            message = str(e.orig) if e.orig is not None else str(e)
            logger.error("schema_fetch_failed", error=message)
            raise ExecutionError("Failed to fetch schema", details=message) from e

        return [SchemaEntry(name=row[0], sql=row[1]) for row in rows]

    @property
    def backend_type(self) -> str:
        return "sqlite"
