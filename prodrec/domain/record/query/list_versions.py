from prodrec.domain.record.model.view import VersionBucket
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.shared.query import Query, QueryHandler, Result


class ListVersions(Query):
    record_id: str


class VersionList(Result):
    record_id: str
    versions: list[VersionBucket]


class ListVersionsHandler(QueryHandler[ListVersions, VersionList]):
    queries: RecordQueryService
    uow: RecordUnitOfWork

    async def run(self, cmd: ListVersions) -> VersionList:
        versions = await self.queries.list_versions(self.uow, cmd.record_id)
        return VersionList(record_id=cmd.record_id, versions=versions)
