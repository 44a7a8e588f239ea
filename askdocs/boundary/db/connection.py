"""
Async engine and session factory for the pgvector backend.

Dependencies: sqlalchemy, asyncpg, askdocs.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from askdocs.boundary.db.base import Base
from askdocs.configs import get_settings


def get_async_engine() -> AsyncEngine:
    """Build an asyncpg engine from POSTGRES_* settings; connections are pinged before reuse."""
    db = get_settings().database
    return create_async_engine(
        db.async_database_url,
        echo=db.echo_sql,
        pool_pre_ping=True,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Session factory bound to engine (or a new one from settings).

    Callers own the transaction: `async with factory() as s, s.begin(): ...`
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create the vector extension and every table registered on Base.metadata."""
    # importing the module registers DocumentChunkModel
    from askdocs.boundary.db import document_model  # noqa: F401

    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
