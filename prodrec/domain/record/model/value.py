from enum import StrEnum

from pydantic import Field

from prodrec.domain.shared.model.value import ValueObject


class RecordStatus(StrEnum):
    DRAFT = "DRAFT"
    MODIFIED = "MODIFIED"
    FINAL = "FINAL"


class FileUpload(ValueObject):
    """Raw uploaded bytes plus the metadata declared by the caller."""

    filename: str
    content: bytes = Field(repr=False)
    mime_type: str
    size: int | None = None  # declared by the caller, if known

    @property
    def byte_size(self) -> int:
        return len(self.content)


class StoredBlob(ValueObject):
    """What the blob store reports back after a write."""

    storage_path: str
    size: int
    content_hash: str


class RecordFilter(ValueObject):
    shop_code: str | None = None
    status: RecordStatus | None = None
    search: str | None = None  # case-sensitive substring of record_code
