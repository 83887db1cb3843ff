import logfire

from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.domain.shared.command import Command, CommandHandler, Result


class DeleteRecord(Command):
    record_id: str


class RecordDeleted(Result):
    record_id: str


class DeleteRecordHandler(CommandHandler[DeleteRecord, RecordDeleted]):
    versioning: VersioningService
    uow: RecordUnitOfWork

    async def run(self, cmd: DeleteRecord) -> RecordDeleted:
        with logfire.span("DeleteRecord"):
            await self.versioning.delete(self.uow, cmd.record_id)
            return RecordDeleted(record_id=cmd.record_id)
