"""SQLAlchemy implementation of RecordRepository (SQLite and PostgreSQL)."""

from typing import List

from sqlalchemy import ColumnElement, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import RecordFilter, RecordStatus
from prodrec.domain.record.port.repository import RecordRepository
from prodrec.domain.shared.error import (
    ConcurrentModificationError,
    DuplicateCodeError,
    FilenameTakenError,
)
from prodrec.infrastructure.persistence.mappers.record import (
    record_to_dict,
    revision_to_dict,
    row_to_record,
    row_to_revision,
)
from prodrec.infrastructure.persistence.tables import file_revisions_table, records_table


def _is_unique_violation(exc: IntegrityError) -> bool:
    return "unique" in str(exc.orig).lower()


def _filter_clauses(record_filter: RecordFilter) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if record_filter.shop_code is not None:
        clauses.append(records_table.c.shop_code == record_filter.shop_code)
    if record_filter.status is not None:
        clauses.append(records_table.c.status == record_filter.status.value)
    if record_filter.search:
        # LIKE %term% with wildcards in the term escaped
        clauses.append(records_table.c.record_code.contains(record_filter.search, autoescape=True))
    return clauses


class SqlRecordRepository(RecordRepository):
    """SQLAlchemy implementation of RecordRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    async def get(self, record_id: str) -> Record | None:
        stmt = select(records_table).where(records_table.c.id == record_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_record(dict(row)) if row else None

    async def get_for_update(self, record_id: str) -> Record | None:
        # FOR UPDATE is dropped by the SQLite dialect; there the transaction
        # already holds the write lock (BEGIN IMMEDIATE).
        stmt = select(records_table).where(records_table.c.id == record_id).with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_record(dict(row)) if row else None

    async def get_by_code(self, record_code: str) -> Record | None:
        stmt = select(records_table).where(records_table.c.record_code == record_code)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_record(dict(row)) if row else None

    async def add(self, record: Record) -> None:
        stmt = insert(records_table).values(**record_to_dict(record))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateCodeError(f"Record code already exists: {record.record_code}") from e
            raise

    async def update(self, record: Record, *, expected_version: int) -> None:
        values = record_to_dict(record)
        del values["id"], values["created_at"]
        stmt = (
            update(records_table)
            .where(records_table.c.id == record.id)
            .where(records_table.c.current_version == expected_version)
            .where(records_table.c.status != RecordStatus.FINAL.value)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise ConcurrentModificationError(
                f"Record {record.id} changed concurrently (expected v{expected_version})"
            )

    async def delete(self, record_id: str) -> None:
        await self.session.execute(
            delete(file_revisions_table).where(file_revisions_table.c.record_id == record_id)
        )
        await self.session.execute(delete(records_table).where(records_table.c.id == record_id))

    async def list(
        self,
        record_filter: RecordFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Record]:
        stmt = (
            select(records_table)
            .where(*_filter_clauses(record_filter))
            .order_by(records_table.c.created_at.desc(), records_table.c.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_record(dict(row)) for row in result.mappings()]

    async def count(self, record_filter: RecordFilter) -> int:
        stmt = (
            select(func.count())
            .select_from(records_table)
            .where(*_filter_clauses(record_filter))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    # -------------------------------------------------------------------------
    # File revisions
    # -------------------------------------------------------------------------

    async def add_revision(self, revision: FileRevision) -> None:
        stmt = insert(file_revisions_table).values(**revision_to_dict(revision))
        # Savepoint so a rejected name leaves the outer transaction usable
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise FilenameTakenError(
                    f"'{revision.filename}' already exists in record {revision.record_id} "
                    f"v{revision.version}"
                ) from e
            raise

    async def get_revision(self, revision_id: str) -> FileRevision | None:
        stmt = select(file_revisions_table).where(file_revisions_table.c.id == revision_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_revision(dict(row)) if row else None

    async def list_revisions(
        self,
        record_id: str,
        *,
        version: int | None = None,
        ascending: bool = False,
    ) -> List[FileRevision]:
        stmt = select(file_revisions_table).where(file_revisions_table.c.record_id == record_id)
        if version is not None:
            stmt = stmt.where(file_revisions_table.c.version == version)

        if ascending:
            stmt = stmt.order_by(
                file_revisions_table.c.version.asc(), file_revisions_table.c.created_at.asc()
            )
        else:
            stmt = stmt.order_by(
                file_revisions_table.c.version.desc(), file_revisions_table.c.created_at.desc()
            )

        result = await self.session.execute(stmt)
        return [row_to_revision(dict(row)) for row in result.mappings()]

    async def list_filenames(self, record_id: str, version: int) -> set[str]:
        stmt = select(file_revisions_table.c.filename).where(
            file_revisions_table.c.record_id == record_id,
            file_revisions_table.c.version == version,
        )
        result = await self.session.execute(stmt)
        return set(result.scalars())
