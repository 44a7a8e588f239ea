"""
Database boundary layer.

SQLAlchemy async engine/session management and the pgvector-backed
document chunk table.

Dependencies: sqlalchemy, asyncpg, pgvector
System role: PostgreSQL persistence for embedded chunks
"""

from askdocs.boundary.db.base import Base
from askdocs.boundary.db.connection import get_async_engine, get_async_session_factory

__all__ = ["Base", "get_async_engine", "get_async_session_factory"]
