"""SQLAlchemy-backed unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.infrastructure.persistence.repository.record import SqlRecordRepository


class SqlUnitOfWork(RecordUnitOfWork):
    """Opens one session per ``async with`` block.

    The session and the repository bound to it are discarded when the block
    ends, so the same handle can run several transactions one after another.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def begin(self) -> None:
        if self._session is not None:
            raise RuntimeError("Unit of work is already open")
        self._session = self._session_factory()
        self.records = SqlRecordRepository(self._session)

    async def commit(self) -> None:
        try:
            await self._require_session().commit()
        finally:
            await self._close()

    async def rollback(self) -> None:
        try:
            await self._require_session().rollback()
        finally:
            await self._close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not open")
        return self._session

    async def _close(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.close()
