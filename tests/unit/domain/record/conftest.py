"""In-memory doubles for the record ports.

The fake store honours the same uniqueness rules as the SQL schema and rolls
back to a snapshot, so service tests can observe exactly what a failed call
leaves behind.
"""

import copy
import hashlib

import pytest

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import RecordFilter, StoredBlob
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.policy import FilePolicy
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.domain.shared.error import (
    BlobStorageError,
    ConcurrentModificationError,
    DuplicateCodeError,
    FilenameTakenError,
    NotFoundError,
)


class InMemoryRecordRepository:
    def __init__(self) -> None:
        self.records: dict[str, Record] = {}
        self.revisions: dict[str, FileRevision] = {}

    async def get(self, record_id):
        record = self.records.get(record_id)
        return record.model_copy(deep=True) if record else None

    async def get_for_update(self, record_id):
        return await self.get(record_id)

    async def get_by_code(self, record_code):
        for record in self.records.values():
            if record.record_code == record_code:
                return record.model_copy(deep=True)
        return None

    async def add(self, record):
        if any(r.record_code == record.record_code for r in self.records.values()):
            raise DuplicateCodeError(f"Record code already exists: {record.record_code}")
        self.records[record.id] = record.model_copy(deep=True)

    async def update(self, record, *, expected_version):
        stored = self.records.get(record.id)
        if stored is None or stored.current_version != expected_version or stored.is_final:
            raise ConcurrentModificationError(f"Record {record.id} changed concurrently")
        self.records[record.id] = record.model_copy(deep=True)

    async def delete(self, record_id):
        self.records.pop(record_id, None)
        self.revisions = {k: v for k, v in self.revisions.items() if v.record_id != record_id}

    def _matching(self, record_filter: RecordFilter):
        items = [
            r
            for r in self.records.values()
            if (record_filter.shop_code is None or r.shop_code == record_filter.shop_code)
            and (record_filter.status is None or r.status == record_filter.status)
            and (not record_filter.search or record_filter.search in r.record_code)
        ]
        return sorted(items, key=lambda r: r.created_at, reverse=True)

    async def list(self, record_filter, *, limit=None, offset=None):
        items = self._matching(record_filter)[offset or 0 :]
        return items[:limit] if limit is not None else items

    async def count(self, record_filter):
        return len(self._matching(record_filter))

    async def add_revision(self, revision):
        for r in self.revisions.values():
            if (r.record_id, r.version, r.filename) == (
                revision.record_id,
                revision.version,
                revision.filename,
            ):
                raise FilenameTakenError(f"{revision.filename} taken")
        self.revisions[revision.id] = revision

    async def get_revision(self, revision_id):
        return self.revisions.get(revision_id)

    async def list_revisions(self, record_id, *, version=None, ascending=False):
        items = [
            r
            for r in self.revisions.values()
            if r.record_id == record_id and (version is None or r.version == version)
        ]
        return sorted(items, key=lambda r: (r.version, r.created_at), reverse=not ascending)

    async def list_filenames(self, record_id, version):
        return {
            r.filename
            for r in self.revisions.values()
            if r.record_id == record_id and r.version == version
        }


class InMemoryUnitOfWork(RecordUnitOfWork):
    def __init__(self, repository: InMemoryRecordRepository) -> None:
        self.records = repository
        self.commits = 0
        self.rollbacks = 0
        self._snapshot = None

    async def begin(self):
        self._snapshot = (
            copy.deepcopy(self.records.records),
            copy.deepcopy(self.records.revisions),
        )

    async def commit(self):
        self.commits += 1
        self._snapshot = None

    async def rollback(self):
        self.rollbacks += 1
        self.records.records, self.records.revisions = self._snapshot
        self._snapshot = None


class InMemoryBlobStorage:
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_put_after: int | None = None
        self.fail_delete = False
        self._puts = 0

    def locate(self, record_id, version, filename):
        return f"records/{record_id}/v{version}/{filename}"

    async def put(self, record_id, version, filename, content):
        self._puts += 1
        if self.fail_put_after is not None and self._puts > self.fail_put_after:
            raise BlobStorageError("disk full")
        path = self.locate(record_id, version, filename)
        self.blobs[path] = content
        return StoredBlob(storage_path=path, size=len(content), content_hash=self.hash(content))

    async def get(self, storage_path):
        if storage_path not in self.blobs:
            raise NotFoundError(f"File not found: {storage_path}", code="FILE_NOT_FOUND")
        return self.blobs[storage_path]

    async def delete(self, storage_path):
        if self.fail_delete:
            raise BlobStorageError(f"cannot delete {storage_path}")
        self.deleted.append(storage_path)
        self.blobs.pop(storage_path, None)

    def hash(self, content):
        return "md5:" + hashlib.md5(content).hexdigest()


@pytest.fixture
def repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def uow(repository) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(repository)


@pytest.fixture
def storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def versioning(storage) -> VersioningService:
    return VersioningService(storage=storage, policy=FilePolicy(), name_collision_attempts=5)


@pytest.fixture
def queries(storage) -> RecordQueryService:
    return RecordQueryService(storage=storage)
