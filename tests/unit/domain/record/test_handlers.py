"""Unit tests for record command and query handlers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from prodrec.domain.record.command.create import CreateRecord, CreateRecordHandler
from prodrec.domain.record.command.delete import DeleteRecord, DeleteRecordHandler
from prodrec.domain.record.command.finalize import FinalizeRecord, FinalizeRecordHandler
from prodrec.domain.record.command.modify import ModifyRecord, ModifyRecordHandler
from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.value import FileUpload, RecordStatus
from prodrec.domain.record.model.view import RecordPage
from prodrec.domain.record.query.download_file import DownloadFile, DownloadFileHandler
from prodrec.domain.record.query.get_record import GetRecord, GetRecordHandler
from prodrec.domain.record.query.list_records import ListRecords, ListRecordsHandler
from prodrec.domain.shared.error import ValidationError


def _make_upload() -> FileUpload:
    return FileUpload(filename="report.pdf", content=b"data", mime_type="application/pdf")


def _make_handler(handler_type, service_field: str, service):
    return handler_type(**{service_field: service, "uow": MagicMock()})


class TestCommandHandlers:
    @pytest.mark.asyncio
    async def test_create_delegates(self):
        record = Record.new("A-1", "S")
        versioning = AsyncMock()
        versioning.create.return_value = (record, [])
        handler = _make_handler(CreateRecordHandler, "versioning", versioning)

        result = await handler.run(
            CreateRecord(record_code="A-1", shop_code="S", files=[_make_upload()], description="d")
        )

        assert result.record == record
        kwargs = versioning.create.await_args.kwargs
        assert kwargs["record_code"] == "A-1"
        assert kwargs["description"] == "d"
        assert kwargs["uploads"][0].filename == "report.pdf"

    @pytest.mark.asyncio
    async def test_modify_passes_notes(self):
        record = Record.new("A-1", "S")
        versioning = AsyncMock()
        versioning.modify.return_value = (record, [])
        handler = _make_handler(ModifyRecordHandler, "versioning", versioning)

        await handler.run(ModifyRecord(record_id=record.id, files=[_make_upload()], notes="n"))

        assert versioning.modify.await_args.kwargs["notes"] == "n"

    @pytest.mark.asyncio
    async def test_finalize(self):
        record = Record.new("A-1", "S")
        record.finalize("qa")
        versioning = AsyncMock()
        versioning.finalize.return_value = record
        handler = _make_handler(FinalizeRecordHandler, "versioning", versioning)

        result = await handler.run(FinalizeRecord(record_id=record.id, finalized_by="qa"))

        assert result.record.status == RecordStatus.FINAL

    @pytest.mark.asyncio
    async def test_delete(self):
        versioning = AsyncMock()
        handler = _make_handler(DeleteRecordHandler, "versioning", versioning)

        result = await handler.run(DeleteRecord(record_id="r1"))

        assert result.record_id == "r1"
        versioning.delete.assert_awaited_once()


class TestQueryHandlers:
    @pytest.mark.asyncio
    async def test_get_record_by_code_resolves_id(self):
        record = Record.new("A-1", "S")
        queries = AsyncMock()
        queries.get_record_by_code.return_value = record
        queries.get_record_detail.return_value = MagicMock(record=record, files=[])
        handler = _make_handler(GetRecordHandler, "queries", queries)

        result = await handler.run(GetRecord(record_code="A-1"))

        assert result.record == record
        assert queries.get_record_detail.await_args.args[1] == record.id

    @pytest.mark.asyncio
    async def test_get_record_needs_a_key(self):
        handler = _make_handler(GetRecordHandler, "queries", AsyncMock())
        with pytest.raises(ValidationError):
            await handler.run(GetRecord())

    @pytest.mark.asyncio
    async def test_list_records_builds_filter(self):
        queries = AsyncMock()
        queries.list_records.return_value = RecordPage.build([], 0, 2, 5)
        handler = _make_handler(ListRecordsHandler, "queries", queries)

        result = await handler.run(ListRecords(shop_code="S", search="A-", page=2, page_size=5))

        record_filter = queries.list_records.await_args.args[1]
        assert record_filter.shop_code == "S"
        assert record_filter.search == "A-"
        assert result.page == 2
        assert result.total_pages == 0

    @pytest.mark.asyncio
    async def test_download_file(self):
        revision = MagicMock(
            filename="report.pdf",
            version=2,
            file_size_bytes=4,
            mime_type="application/pdf",
            content_hash="md5:x",
        )
        queries = AsyncMock()
        queries.read_file.return_value = (revision, b"data")
        handler = _make_handler(DownloadFileHandler, "queries", queries)

        result = await handler.run(DownloadFile(record_id="r1", file_id="f1"))

        assert result.content == b"data"
        assert result.filename == "report.pdf"
        assert result.version == 2
