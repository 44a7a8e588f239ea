"""
Test suite for the pgvector store backend.

Drives PgVectorStore with a mocked async session factory and inspects the
statements it executes, compiled for the PostgreSQL dialect.

System role: Verification of the production vector store queries
"""

import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.dialects import postgresql

from askdocs.boundary.db.document_model import DocumentChunkModel
from askdocs.boundary.vdb.pgvector_store import PgVectorStore
from askdocs.boundary.vdb.vector_schemas import ChunkMetadata, DocumentRow

TABLE = DocumentChunkModel.__tablename__


@pytest.fixture
def mock_engine() -> MagicMock:
    """Provide mock async engine."""
    engine = MagicMock()
    engine.dispose = AsyncMock()
    return engine


@pytest.fixture
def mock_session() -> MagicMock:
    """Provide mock session usable as `async with factory() as s, s.begin()`."""
    session = MagicMock()
    session.__aenter__.return_value = session
    session.execute = AsyncMock(return_value=MagicMock())
    return session


@pytest.fixture
def session_factory(mock_session: MagicMock, mock_engine: MagicMock) -> MagicMock:
    """Provide mock async_sessionmaker returning mock_session."""
    factory = MagicMock(return_value=mock_session)
    factory.kw = {"bind": mock_engine}
    return factory


@pytest.fixture
def store(session_factory: MagicMock) -> PgVectorStore:
    """Provide PgVectorStore over the mocked session factory."""
    return PgVectorStore(session_factory)


def executed_sql(session: MagicMock):
    """Compile the single executed statement; return (sql, params)."""
    session.execute.assert_awaited_once()
    stmt = session.execute.await_args.args[0]
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def make_row(content: str, index: int) -> DocumentRow:
    return DocumentRow(
        content=content,
        embedding=[0.1, 0.2, 0.3],
        metadata=ChunkMetadata(source="fox.txt", chunk_index=index, total_chunks=2),
    )


class TestInsert:
    """Test suite for PgVectorStore.insert()."""

    @pytest.mark.asyncio
    async def test_insert_should_add_batch_in_one_transaction(
        self, store: PgVectorStore, mock_session: MagicMock, session_factory: MagicMock
    ) -> None:
        """Test the whole batch is added inside a single begin() block."""
        await store.insert([make_row("first", 0), make_row("second", 1)])

        session_factory.assert_called_once()
        mock_session.begin.assert_called_once()
        mock_session.add_all.assert_called_once()
        models = mock_session.add_all.call_args.args[0]
        assert [m.content for m in models] == ["first", "second"]
        assert models[1].metadata_ == {"source": "fox.txt", "chunk_index": 1, "total_chunks": 2}
        assert models[0].embedding == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_insert_empty_should_not_open_session(
        self, store: PgVectorStore, session_factory: MagicMock
    ) -> None:
        """Test an empty batch performs no I/O."""
        await store.insert([])

        session_factory.assert_not_called()


class TestSimilaritySearch:
    """Test suite for PgVectorStore.similarity_search()."""

    @pytest.mark.asyncio
    async def test_query_should_filter_rank_and_limit_by_cosine_distance(
        self, store: PgVectorStore, mock_session: MagicMock
    ) -> None:
        """Test distance < 1 - threshold, closest first, at most top_k rows."""
        mock_session.execute.return_value.all.return_value = []

        await store.similarity_search([0.1, 0.2, 0.3], threshold=0.7, top_k=3)

        sql, params = executed_sql(mock_session)
        assert f"{TABLE}.embedding <=>" in sql
        assert re.search(rf"WHERE \(?{TABLE}\.embedding <=> \S+\)? < ", sql)
        assert re.search(rf"ORDER BY {TABLE}\.embedding <=> \S+\s+LIMIT ", sql)
        floats = [v for v in params.values() if isinstance(v, float)]
        assert any(v == pytest.approx(0.3) for v in floats)
        assert 3 in params.values()
        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_query_should_map_rows_to_matches(
        self, store: PgVectorStore, mock_session: MagicMock
    ) -> None:
        """Test result rows become RetrievedMatch objects in store order."""
        mock_session.execute.return_value.all.return_value = [
            ("fox text", {"source": "fox.txt"}, 0.92),
            ("dog text", None, 0.81),
        ]

        matches = await store.similarity_search([0.1, 0.2, 0.3], threshold=0.7, top_k=3)

        assert [m.content for m in matches] == ["fox text", "dog text"]
        assert matches[0].metadata == {"source": "fox.txt"}
        assert matches[1].metadata == {}
        assert matches[0].similarity == pytest.approx(0.92)


class TestListRowHeaders:
    """Test suite for PgVectorStore.list_row_headers()."""

    @pytest.mark.asyncio
    async def test_should_scan_metadata_and_created_at(
        self, store: PgVectorStore, mock_session: MagicMock
    ) -> None:
        """Test the listing scan selects only metadata and creation time."""
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        mock_session.execute.return_value.all.return_value = [({"source": "fox.txt"}, created)]

        headers = await store.list_row_headers()

        sql, _ = executed_sql(mock_session)
        assert re.match(rf"SELECT {TABLE}\.metadata, {TABLE}\.created_at\s+FROM {TABLE}", sql)
        assert "WHERE" not in sql
        assert headers[0].metadata == {"source": "fox.txt"}
        assert headers[0].created_at == created


class TestDeleteWhereSource:
    """Test suite for PgVectorStore.delete_where_source()."""

    @pytest.mark.asyncio
    async def test_should_delete_by_jsonb_source_text(
        self, store: PgVectorStore, mock_session: MagicMock
    ) -> None:
        """Test deletion compares metadata->>'source' inside a transaction."""
        mock_session.execute.return_value = MagicMock(rowcount=2)

        deleted = await store.delete_where_source("fox.txt")

        sql, params = executed_sql(mock_session)
        assert sql.startswith(f"DELETE FROM {TABLE}")
        assert f"{TABLE}.metadata ->> " in sql
        assert "source" in params.values()
        assert "fox.txt" in params.values()
        mock_session.begin.assert_called_once()
        assert deleted == 2

    @pytest.mark.asyncio
    async def test_should_report_zero_when_nothing_matches(
        self, store: PgVectorStore, mock_session: MagicMock
    ) -> None:
        """Test a missing rowcount is reported as 0."""
        mock_session.execute.return_value = MagicMock(rowcount=None)

        assert await store.delete_where_source("missing.txt") == 0


class TestLifecycle:
    """Test suite for initialize() and close()."""

    @pytest.mark.asyncio
    async def test_initialize_should_create_tables_on_bound_engine(
        self, store: PgVectorStore, mock_engine: MagicMock
    ) -> None:
        """Test schema creation runs against the factory's engine."""
        with patch(
            "askdocs.boundary.vdb.pgvector_store.create_tables", new=AsyncMock()
        ) as create_tables:
            await store.initialize()

        create_tables.assert_awaited_once_with(mock_engine)

    @pytest.mark.asyncio
    async def test_close_should_dispose_engine(
        self, store: PgVectorStore, mock_engine: MagicMock
    ) -> None:
        """Test close releases the connection pool."""
        await store.close()

        mock_engine.dispose.assert_awaited_once()
