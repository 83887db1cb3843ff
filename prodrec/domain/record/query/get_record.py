from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.shared.error import ValidationError
from prodrec.domain.shared.query import Query, QueryHandler, Result


class GetRecord(Query):
    record_id: str | None = None
    record_code: str | None = None


class RecordDetailResult(Result):
    record: Record
    files: list[FileRevision]


class GetRecordHandler(QueryHandler[GetRecord, RecordDetailResult]):
    """Looks a record up by id, or by code when no id is given."""

    queries: RecordQueryService
    uow: RecordUnitOfWork

    async def run(self, cmd: GetRecord) -> RecordDetailResult:
        record_id = cmd.record_id
        if record_id is None:
            if cmd.record_code is None:
                raise ValidationError("Either record_id or record_code is required", field="record_id")
            record = await self.queries.get_record_by_code(self.uow, cmd.record_code)
            record_id = record.id

        detail = await self.queries.get_record_detail(self.uow, record_id)
        return RecordDetailResult(record=detail.record, files=detail.files)
