from datetime import UTC, datetime
from uuid import uuid4

from pydantic import Field

from prodrec.domain.record.model.value import StoredBlob
from prodrec.domain.shared.model.aggregate import Entity


class FileRevision(Entity):
    """One stored file tied to a specific version of a record."""

    id: str
    record_id: str
    version: int = Field(ge=1)
    filename: str
    storage_path: str
    file_size_bytes: int
    mime_type: str
    extension: str
    content_hash: str
    notes: str | None = None
    created_at: datetime

    @classmethod
    def accept(
        cls,
        record_id: str,
        version: int,
        filename: str,
        mime_type: str,
        blob: StoredBlob,
        notes: str | None = None,
    ) -> "FileRevision":
        return cls(
            id=str(uuid4()),
            record_id=record_id,
            version=version,
            filename=filename,
            storage_path=blob.storage_path,
            file_size_bytes=blob.size,
            mime_type=mime_type,
            extension=_extension_of(filename),
            content_hash=blob.content_hash,
            notes=notes,
            created_at=datetime.now(UTC),
        )


def _extension_of(filename: str) -> str:
    """Lower-case extension without the dot ('' when there is none)."""
    dot_idx = filename.rfind(".")
    if dot_idx <= 0:
        return ""
    return filename[dot_idx + 1 :].lower()
