import logfire

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import FileUpload
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.domain.shared.command import Command, CommandHandler, Result


class ModifyRecord(Command):
    record_id: str
    files: list[FileUpload]
    notes: str | None = None


class RecordModified(Result):
    record: Record
    files: list[FileRevision]


class ModifyRecordHandler(CommandHandler[ModifyRecord, RecordModified]):
    versioning: VersioningService
    uow: RecordUnitOfWork

    async def run(self, cmd: ModifyRecord) -> RecordModified:
        with logfire.span("ModifyRecord"):
            record, files = await self.versioning.modify(
                self.uow, cmd.record_id, cmd.files, notes=cmd.notes
            )
            logfire.info(
                "Record modified", record_id=record.id, version=record.current_version
            )
            return RecordModified(record=record, files=files)
