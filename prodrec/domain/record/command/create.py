import logfire

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import FileUpload
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.domain.shared.command import Command, CommandHandler, Result


class CreateRecord(Command):
    record_code: str
    shop_code: str
    files: list[FileUpload]
    description: str | None = None


class RecordCreated(Result):
    record: Record
    files: list[FileRevision]


class CreateRecordHandler(CommandHandler[CreateRecord, RecordCreated]):
    versioning: VersioningService
    uow: RecordUnitOfWork

    async def run(self, cmd: CreateRecord) -> RecordCreated:
        with logfire.span("CreateRecord"):
            record, files = await self.versioning.create(
                self.uow,
                record_code=cmd.record_code,
                shop_code=cmd.shop_code,
                uploads=cmd.files,
                description=cmd.description,
            )
            logfire.info("Record created", record_id=record.id, record_code=record.record_code)
            return RecordCreated(record=record, files=files)
