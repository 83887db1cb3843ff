import logfire

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.domain.shared.command import Command, CommandHandler, Result


class FinalizeRecord(Command):
    record_id: str
    finalized_by: str
    notes: str | None = None


class RecordFinalized(Result):
    record: Record


class FinalizeRecordHandler(CommandHandler[FinalizeRecord, RecordFinalized]):
    versioning: VersioningService
    uow: RecordUnitOfWork

    async def run(self, cmd: FinalizeRecord) -> RecordFinalized:
        with logfire.span("FinalizeRecord"):
            record = await self.versioning.finalize(
                self.uow, cmd.record_id, cmd.finalized_by, notes=cmd.notes
            )
            logfire.info("Record finalized", record_id=record.id, finalized_by=cmd.finalized_by)
            return RecordFinalized(record=record)
