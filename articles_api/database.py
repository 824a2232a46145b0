"""
Storage gateway: the only place that talks to the relational store.

The gateway owns an async SQLAlchemy engine (and therefore the connection
pool). It is built once in the application lifespan, stored on
``app.state`` and handed to request handlers through the ``get_gateway``
dependency; tests override that dependency with a gateway bound to an
in-memory SQLite engine.

Every call to ``query`` runs in its own short transaction. Handlers never
group statements, so there is no cross-statement isolation.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from articles_api.config import Settings

logger = logging.getLogger(__name__)

# What a failed round-trip can raise: driver errors wrapped by SQLAlchemy,
# and socket errors (refused/unreachable host) that asyncpg raises unwrapped
# while opening a connection.
STORE_ERRORS = (SQLAlchemyError, OSError)


class Base(DeclarativeBase):
    pass


class StorageGateway:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageGateway":
        engine = create_async_engine(
            settings.database_url,
            echo=settings.DEBUG,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        return cls(engine)

    async def query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        Execute *sql* with bound *params* and return the resulting rows.

        Statements without a result set (or DML without ``RETURNING``)
        yield an empty list. Store errors propagate unchanged.
        """
        async with self._engine.begin() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            if not result.returns_rows:
                return []
            # Rows must be read before the transaction closes.
            return [dict(row) for row in result.mappings().all()]

    async def create_schema(self) -> None:
        """Create the ``articles`` table if it does not exist yet."""
        # Registers the table on Base.metadata.
        import articles_api.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Table 'articles' created or already present")

    async def dispose(self) -> None:
        await self._engine.dispose()


def get_gateway(request: Request) -> StorageGateway:
    return request.app.state.gateway
