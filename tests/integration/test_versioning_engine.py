"""End-to-end engine tests against SQLite and the local blob store."""

import asyncio
from pathlib import Path

import pytest

from prodrec.domain.record.model.value import FileUpload, RecordFilter, RecordStatus
from prodrec.domain.shared.error import (
    AlreadyFinalizedError,
    DuplicateCodeError,
    ForbiddenError,
    InvalidFileError,
)

pytestmark = pytest.mark.integration


def _make_upload(filename: str = "report.pdf", content: bytes | None = None) -> FileUpload:
    content = content if content is not None else bytes(range(256)) * 4
    return FileUpload(filename=filename, content=content, mime_type="application/pdf")


def _blob_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


class TestScenario:
    @pytest.mark.asyncio
    async def test_full_lifecycle(self, versioning, queries, uow, blob_root):
        # create A-1 / S with a 1024 byte report.pdf
        record, files = await versioning.create(uow, "A-1", "S", [_make_upload()])
        assert record.current_version == 1
        assert record.status == RecordStatus.DRAFT
        assert [(f.version, f.filename) for f in files] == [(1, "report.pdf")]
        assert files[0].file_size_bytes == 1024

        # modify with report.pdf twice in one call
        record, files = await versioning.modify(
            uow, record.id, [_make_upload(), _make_upload(content=b"second copy")]
        )
        assert record.current_version == 2
        assert record.status == RecordStatus.MODIFIED
        assert [(f.version, f.filename) for f in files] == [(2, "report.pdf"), (2, "report_1.pdf")]

        # finalize
        record = await versioning.finalize(uow, record.id, "qa")
        assert record.status == RecordStatus.FINAL
        assert record.finalized_at is not None

        with pytest.raises(AlreadyFinalizedError):
            await versioning.modify(uow, record.id, [_make_upload()])
        with pytest.raises(ForbiddenError):
            await versioning.delete(uow, record.id)

        # nothing leaked from the rejected modify
        stored = await queries.get_record(uow, record.id)
        assert stored.current_version == 2
        assert stored.status == RecordStatus.FINAL
        assert len(_blob_files(blob_root)) == 3

        history = await queries.version_history(uow, record.id)
        assert [(b.version, b.file_count) for b in history] == [(1, 1), (2, 2)]

    @pytest.mark.asyncio
    async def test_blobs_round_trip(self, versioning, queries, storage, uow):
        content = b"\x00\xffbinary" * 100
        record, files = await versioning.create(uow, "A-1", "S", [_make_upload(content=content)])

        revision, read_back = await queries.read_file(uow, record.id, files[0].id)

        assert read_back == content
        assert revision.content_hash == storage.hash(read_back)
        assert revision.storage_path == f"records/{record.id}/v1/report.pdf"

    @pytest.mark.asyncio
    async def test_longest_names_resolve_within_filesystem_limit(self, versioning, uow, blob_root):
        name = "a" * 251 + ".pdf"
        _, files = await versioning.create(
            uow, "A-1", "S", [_make_upload(name), _make_upload(name, content=b"second copy")]
        )

        assert [len(f.filename) for f in files] == [255, 255]
        assert files[1].filename == "a" * 249 + "_1.pdf"
        assert [p.name for p in _blob_files(blob_root)] == sorted(f.filename for f in files)


class TestFailureLeavesNoTrace:
    @pytest.mark.asyncio
    async def test_duplicate_code_writes_no_blob(self, versioning, queries, uow, blob_root):
        await versioning.create(uow, "A-1", "S", [_make_upload()])
        before = _blob_files(blob_root)

        with pytest.raises(DuplicateCodeError):
            await versioning.create(uow, "A-1", "S", [_make_upload("other.pdf")])

        assert _blob_files(blob_root) == before
        page = await queries.list_records(uow)
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_invalid_file(self, versioning, queries, uow, blob_root):
        bad = FileUpload(filename="x.exe", content=b"MZ", mime_type="application/x-msdownload")
        with pytest.raises(InvalidFileError):
            await versioning.create(uow, "A-1", "S", [bad])
        assert (await queries.list_records(uow)).total == 0
        assert _blob_files(blob_root) == []

    @pytest.mark.asyncio
    async def test_delete_removes_blobs_and_directories(self, versioning, queries, uow, blob_root):
        record, _ = await versioning.create(uow, "A-1", "S", [_make_upload()])
        await versioning.modify(uow, record.id, [_make_upload()])

        await versioning.delete(uow, record.id)

        assert (await queries.list_records(uow)).total == 0
        assert _blob_files(blob_root) == []
        assert not (blob_root / "records" / record.id).exists()


class TestPagination:
    @pytest.mark.asyncio
    async def test_25_records_in_pages_of_10(self, versioning, queries, uow):
        for i in range(25):
            await versioning.create(uow, f"R-{i:02d}", "S", [_make_upload(content=b"x")])

        pages = [await queries.list_records(uow, page=p, page_size=10) for p in (1, 2, 3)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        assert {p.total_pages for p in pages} == {3}
        codes = [r.record_code for p in pages for r in p.items]
        assert codes == [f"R-{i:02d}" for i in reversed(range(25))]

    @pytest.mark.asyncio
    async def test_filters(self, versioning, queries, uow):
        a, _ = await versioning.create(uow, "SHOE-1", "S1", [_make_upload(content=b"x")])
        await versioning.create(uow, "SHOE-2", "S2", [_make_upload(content=b"x")])
        await versioning.create(uow, "shoe-3", "S1", [_make_upload(content=b"x")])
        await versioning.modify(uow, a.id, [_make_upload(content=b"y")])

        page = await queries.list_records(
            uow, RecordFilter(shop_code="S1", status=RecordStatus.MODIFIED, search="SHOE")
        )
        assert [r.record_code for r in page.items] == ["SHOE-1"]


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_modifies_serialize(self, versioning, queries, make_uow):
        record, _ = await versioning.create(make_uow(), "A-1", "S", [_make_upload()])

        results = await asyncio.gather(
            *(
                versioning.modify(make_uow(), record.id, [_make_upload(content=f"{i}".encode())])
                for i in range(4)
            )
        )

        versions = sorted(r.current_version for r, _ in results)
        assert versions == [2, 3, 4, 5]
        stored = await queries.get_record(make_uow(), record.id)
        assert stored.current_version == 5

        buckets = await queries.version_history(make_uow(), record.id)
        assert [b.version for b in buckets] == [1, 2, 3, 4, 5]
        assert all(b.file_count == 1 for b in buckets)

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_code(self, versioning, queries, make_uow, blob_root):
        outcomes = await asyncio.gather(
            versioning.create(make_uow(), "A-1", "S", [_make_upload("a.pdf")]),
            versioning.create(make_uow(), "A-1", "S", [_make_upload("b.pdf")]),
            return_exceptions=True,
        )

        errors = [o for o in outcomes if isinstance(o, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateCodeError)
        assert (await queries.list_records(make_uow())).total == 1
        assert len(_blob_files(blob_root)) == 1
