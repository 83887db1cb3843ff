from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.shared.query import Query, QueryHandler, Result


class DownloadFile(Query):
    record_id: str
    file_id: str


class FileContent(Result):
    content: bytes
    filename: str
    version: int
    size: int
    content_type: str
    content_hash: str


class DownloadFileHandler(QueryHandler[DownloadFile, FileContent]):
    queries: RecordQueryService
    uow: RecordUnitOfWork

    async def run(self, cmd: DownloadFile) -> FileContent:
        revision, content = await self.queries.read_file(self.uow, cmd.record_id, cmd.file_id)
        return FileContent(
            content=content,
            filename=revision.filename,
            version=revision.version,
            size=revision.file_size_bytes,
            content_type=revision.mime_type,
            content_hash=revision.content_hash,
        )
