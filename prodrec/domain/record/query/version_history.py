from prodrec.domain.record.model.view import VersionBucket
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.shared.query import Query, QueryHandler, Result


class GetVersionHistory(Query):
    record_id: str


class VersionHistory(Result):
    record_id: str
    versions: list[VersionBucket]  # oldest first


class GetVersionHistoryHandler(QueryHandler[GetVersionHistory, VersionHistory]):
    queries: RecordQueryService
    uow: RecordUnitOfWork

    async def run(self, cmd: GetVersionHistory) -> VersionHistory:
        versions = await self.queries.version_history(self.uow, cmd.record_id)
        return VersionHistory(record_id=cmd.record_id, versions=versions)
