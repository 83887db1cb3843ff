from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.value import RecordFilter, RecordStatus
from prodrec.domain.record.port.uow import RecordUnitOfWork
from prodrec.domain.record.service.query import DEFAULT_PAGE_SIZE, RecordQueryService
from prodrec.domain.shared.query import Query, QueryHandler, Result


class ListRecords(Query):
    shop_code: str | None = None
    status: RecordStatus | None = None
    search: str | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


class RecordList(Result):
    items: list[Record]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListRecordsHandler(QueryHandler[ListRecords, RecordList]):
    queries: RecordQueryService
    uow: RecordUnitOfWork

    async def run(self, cmd: ListRecords) -> RecordList:
        record_filter = RecordFilter(shop_code=cmd.shop_code, status=cmd.status, search=cmd.search)
        page = await self.queries.list_records(
            self.uow, record_filter, page=cmd.page, page_size=cmd.page_size
        )
        return RecordList(**page.model_dump())
