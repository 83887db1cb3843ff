"""Fixtures for SQLite-backed integration tests.

Each test gets its own database file and blob root under tmp_path. A file
database (not :memory:) lets concurrent units of work hold separate
connections, as they would in production.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from prodrec.config import DatabaseConfig
from prodrec.domain.record.service.policy import FilePolicy
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.infrastructure.persistence.adapter.storage import LocalBlobStorageAdapter
from prodrec.infrastructure.persistence.database import create_db_engine, create_session_factory
from prodrec.infrastructure.persistence.tables import metadata
from prodrec.infrastructure.persistence.uow import SqlUnitOfWork


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'prodrec.db'}"


@pytest_asyncio.fixture
async def engine(database_url: str):
    """Per-test async engine with the schema created from table metadata."""
    engine = create_db_engine(DatabaseConfig(url=database_url, busy_timeout=10.0))
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return create_session_factory(engine)


@pytest.fixture
def make_uow(session_factory):
    def _make() -> SqlUnitOfWork:
        return SqlUnitOfWork(session_factory)

    return _make


@pytest.fixture
def uow(make_uow) -> SqlUnitOfWork:
    return make_uow()


@pytest.fixture
def blob_root(tmp_path: Path) -> Path:
    return tmp_path / "files"


@pytest.fixture
def storage(blob_root: Path) -> LocalBlobStorageAdapter:
    return LocalBlobStorageAdapter(base_path=str(blob_root))


@pytest.fixture
def versioning(storage) -> VersioningService:
    return VersioningService(storage=storage, policy=FilePolicy())


@pytest.fixture
def queries(storage) -> RecordQueryService:
    return RecordQueryService(storage=storage)
