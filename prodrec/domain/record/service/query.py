from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import RecordFilter
from prodrec.domain.record.model.view import RecordDetail, RecordPage, VersionBucket
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.versioning import require_record
from prodrec.domain.shared.error import NotFoundError, ValidationError
from prodrec.domain.shared.service import Service

DEFAULT_PAGE_SIZE = 10


class RecordQueryService(Service):
    """Read-side projections over records and their revisions."""

    storage: BlobStoragePort

    async def get_record(self, uow: RecordUnitOfWork, record_id: str) -> Record:
        async with uow:
            return await require_record(uow.records, record_id)

    async def get_record_by_code(self, uow: RecordUnitOfWork, record_code: str) -> Record:
        async with uow:
            record = await uow.records.get_by_code(record_code)
        if record is None:
            raise NotFoundError(f"Record not found for code: {record_code}")
        return record

    async def get_record_detail(self, uow: RecordUnitOfWork, record_id: str) -> RecordDetail:
        async with uow:
            record = await require_record(uow.records, record_id)
            files = await uow.records.list_revisions(record_id)
        return RecordDetail(record=record, files=files)

    async def get_current_version(self, uow: RecordUnitOfWork, record_id: str) -> int:
        record = await self.get_record(uow, record_id)
        return record.current_version

    async def list_records(
        self,
        uow: RecordUnitOfWork,
        record_filter: RecordFilter | None = None,
        *,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        if page < 1:
            raise ValidationError("page must be >= 1", field="page")
        if page_size < 1:
            raise ValidationError("page_size must be >= 1", field="page_size")

        record_filter = record_filter or RecordFilter()
        async with uow:
            items = await uow.records.list(
                record_filter, limit=page_size, offset=(page - 1) * page_size
            )
            total = await uow.records.count(record_filter)
        return RecordPage.build(items, total, page, page_size)

    async def list_files(
        self,
        uow: RecordUnitOfWork,
        record_id: str,
        version: int | None = None,
    ) -> list[FileRevision]:
        """Revisions of a record, newest version first."""
        async with uow:
            await require_record(uow.records, record_id)
            return await uow.records.list_revisions(record_id, version=version)

    async def list_versions(self, uow: RecordUnitOfWork, record_id: str) -> list[VersionBucket]:
        """Version buckets, newest version first."""
        async with uow:
            await require_record(uow.records, record_id)
            files = await uow.records.list_revisions(record_id)
        return group_by_version(files)

    async def version_history(self, uow: RecordUnitOfWork, record_id: str) -> list[VersionBucket]:
        """Version buckets in the order they were accepted, oldest first."""
        async with uow:
            await require_record(uow.records, record_id)
            files = await uow.records.list_revisions(record_id, ascending=True)
        return group_by_version(files)

    async def get_file(self, uow: RecordUnitOfWork, record_id: str, file_id: str) -> FileRevision:
        async with uow:
            revision = await uow.records.get_revision(file_id)
        if revision is None or revision.record_id != record_id:
            raise NotFoundError(f"File not found: {file_id}", code="FILE_NOT_FOUND")
        return revision

    async def read_file(
        self,
        uow: RecordUnitOfWork,
        record_id: str,
        file_id: str,
    ) -> tuple[FileRevision, bytes]:
        revision = await self.get_file(uow, record_id, file_id)
        content = await self.storage.get(revision.storage_path)
        return revision, content

    async def file_exists(
        self,
        uow: RecordUnitOfWork,
        record_id: str,
        version: int,
        filename: str,
    ) -> bool:
        async with uow:
            return filename in await uow.records.list_filenames(record_id, version)


def group_by_version(files: list[FileRevision]) -> list[VersionBucket]:
    """Group revisions into buckets, keeping the order the versions arrive in."""
    grouped: dict[int, list[FileRevision]] = {}
    for f in files:
        grouped.setdefault(f.version, []).append(f)

    return [
        VersionBucket(
            version=version,
            files=bucket,
            file_count=len(bucket),
            earliest_upload_at=min(f.created_at for f in bucket),
        )
        for version, bucket in grouped.items()
    ]
