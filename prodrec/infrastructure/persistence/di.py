from typing import AsyncIterable

from dishka import from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from prodrec.config import Config
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.infrastructure.persistence.adapter.storage import LocalBlobStorageAdapter
from prodrec.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from prodrec.infrastructure.persistence.uow import SqlUnitOfWork
from prodrec.util.di.base import Provider
from prodrec.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # Blob storage
    @provide(scope=Scope.APP)
    def get_blob_storage(self, config: Config) -> BlobStoragePort:
        return LocalBlobStorageAdapter(base_path=config.storage.root)

    # UOW-scoped unit of work; it opens its own session per transaction
    @provide(scope=Scope.UOW)
    def get_unit_of_work(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> RecordUnitOfWork:
        return SqlUnitOfWork(session_factory)
