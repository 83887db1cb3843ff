"""Read-side projections built from records and their revisions."""

import math
from datetime import datetime

from pydantic import BaseModel

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision


class VersionBucket(BaseModel):
    """All revisions sharing one (record, version) pair."""

    version: int
    files: list[FileRevision]
    file_count: int
    earliest_upload_at: datetime


class RecordPage(BaseModel):
    items: list[Record]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, items: list[Record], total: int, page: int, page_size: int) -> "RecordPage":
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )


class RecordDetail(BaseModel):
    record: Record
    files: list[FileRevision]  # newest version first
