import logging
from collections.abc import Sequence

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import FileUpload, StoredBlob
from prodrec.domain.record.port.repository import RecordRepository
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.filename import resolve_filename
from prodrec.domain.record.service.policy import FilePolicy
from prodrec.domain.shared.error import (
    BlobStorageError,
    DuplicateCodeError,
    FilenameTakenError,
    NameCollisionError,
    NotFoundError,
    ValidationError,
)
from prodrec.domain.shared.service import Service

logger = logging.getLogger(__name__)


class VersioningService(Service):
    """Accepts file revisions and drives the DRAFT -> MODIFIED -> FINAL lifecycle.

    Every mutating call takes the unit of work it runs in. The record row and
    the revisions it gains are committed together; blobs written for a call
    that does not commit are deleted again before the error reaches the
    caller.
    """

    storage: BlobStoragePort
    policy: FilePolicy
    name_collision_attempts: int = 5

    async def create(
        self,
        uow: RecordUnitOfWork,
        record_code: str,
        shop_code: str,
        uploads: Sequence[FileUpload],
        description: str | None = None,
    ) -> tuple[Record, list[FileRevision]]:
        self._check_uploads(uploads)
        record = Record.new(record_code, shop_code, description)

        written: list[str] = []
        try:
            async with uow:
                if await uow.records.get_by_code(record_code) is not None:
                    raise DuplicateCodeError(f"Record code already exists: {record_code}")
                await uow.records.add(record)
                revisions = await self._accept(
                    uow.records, record, record.current_version, uploads, None, written
                )
        except BaseException:
            await self._discard(written)
            raise

        logger.info(
            "Created record %s (%s) with %d file(s)", record.id, record.record_code, len(revisions)
        )
        return record, revisions

    async def modify(
        self,
        uow: RecordUnitOfWork,
        record_id: str,
        uploads: Sequence[FileUpload],
        notes: str | None = None,
    ) -> tuple[Record, list[FileRevision]]:
        self._check_uploads(uploads)

        written: list[str] = []
        try:
            async with uow:
                record = await require_record(uow.records, record_id, lock=True)
                expected_version = record.current_version
                version = record.advance_version()
                revisions = await self._accept(uow.records, record, version, uploads, notes, written)
                await uow.records.update(record, expected_version=expected_version)
        except BaseException:
            await self._discard(written)
            raise

        logger.info(
            "Record %s advanced to v%d with %d file(s)", record.id, version, len(revisions)
        )
        return record, revisions

    async def finalize(
        self,
        uow: RecordUnitOfWork,
        record_id: str,
        finalized_by: str,
        notes: str | None = None,
    ) -> Record:
        async with uow:
            record = await require_record(uow.records, record_id, lock=True)
            expected_version = record.current_version
            record.finalize(finalized_by, notes)
            await uow.records.update(record, expected_version=expected_version)

        logger.info("Record %s finalized by %s", record.id, finalized_by)
        return record

    async def delete(self, uow: RecordUnitOfWork, record_id: str) -> None:
        async with uow:
            record = await require_record(uow.records, record_id, lock=True)
            record.ensure_deletable()
            revisions = await uow.records.list_revisions(record_id)
            await uow.records.delete(record_id)

        # The store is authoritative; a blob that cannot be removed is only logged.
        await self._discard([r.storage_path for r in revisions])
        logger.info("Deleted record %s and %d file(s)", record_id, len(revisions))

    # -------------------------------------------------------------------------
    # Accept-revision primitive shared by create and modify
    # -------------------------------------------------------------------------

    def _check_uploads(self, uploads: Sequence[FileUpload]) -> None:
        if not uploads:
            raise ValidationError("At least one file is required", field="file", code="FILE_REQUIRED")
        for upload in uploads:
            self.policy.check(upload)

    async def _accept(
        self,
        records: RecordRepository,
        record: Record,
        version: int,
        uploads: Sequence[FileUpload],
        notes: str | None,
        written: list[str],
    ) -> list[FileRevision]:
        return [
            await self._accept_one(records, record.id, version, upload, notes, written)
            for upload in uploads
        ]

    async def _accept_one(
        self,
        records: RecordRepository,
        record_id: str,
        version: int,
        upload: FileUpload,
        notes: str | None,
        written: list[str],
    ) -> FileRevision:
        content_hash = self.storage.hash(upload.content)

        for attempt in range(1, self.name_collision_attempts + 1):
            existing = await records.list_filenames(record_id, version)
            filename = resolve_filename(existing, upload.filename)
            expected = StoredBlob(
                storage_path=self.storage.locate(record_id, version, filename),
                size=upload.byte_size,
                content_hash=content_hash,
            )
            revision = FileRevision.accept(
                record_id, version, filename, upload.mime_type, expected, notes
            )
            # Claim the name in the store before touching the bucket on disk.
            try:
                await records.add_revision(revision)
            except FilenameTakenError:
                logger.warning(
                    "Filename %s already taken in record %s v%d (attempt %d/%d)",
                    filename,
                    record_id,
                    version,
                    attempt,
                    self.name_collision_attempts,
                )
                continue

            stored = await self.storage.put(record_id, version, filename, upload.content)
            written.append(stored.storage_path)
            if stored != expected:
                raise BlobStorageError(
                    f"Stored blob {stored.storage_path} does not match the accepted revision"
                )
            return revision

        raise NameCollisionError(
            f"Could not claim a free name for '{upload.filename}' in record {record_id} "
            f"v{version} after {self.name_collision_attempts} attempts"
        )

    async def _discard(self, storage_paths: Sequence[str]) -> None:
        for path in storage_paths:
            try:
                await self.storage.delete(path)
            except BlobStorageError:
                logger.exception("Failed to delete blob %s", path)


async def require_record(
    records: RecordRepository, record_id: str, *, lock: bool = False
) -> Record:
    record = await (records.get_for_update(record_id) if lock else records.get(record_id))
    if record is None:
        raise NotFoundError(f"Record not found: {record_id}")
    return record
