from datetime import UTC, datetime
from typing import Any, Dict

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import RecordStatus


def _aware(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def row_to_record(row: Dict[str, Any]) -> Record:
    return Record(
        id=row["id"],
        record_code=row["record_code"],
        shop_code=row["shop_code"],
        current_version=row["current_version"],
        status=RecordStatus(row["status"]),
        description=row.get("description"),
        finalized_at=_aware(row.get("finalized_at")),
        finalized_by=row.get("finalized_by"),
        finalization_notes=row.get("finalization_notes"),
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def record_to_dict(record: Record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "record_code": record.record_code,
        "shop_code": record.shop_code,
        "current_version": record.current_version,
        "status": record.status.value,
        "description": record.description,
        "finalized_at": record.finalized_at,
        "finalized_by": record.finalized_by,
        "finalization_notes": record.finalization_notes,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


def row_to_revision(row: Dict[str, Any]) -> FileRevision:
    return FileRevision(
        id=row["id"],
        record_id=row["record_id"],
        version=row["version"],
        filename=row["filename"],
        storage_path=row["storage_path"],
        file_size_bytes=row["file_size_bytes"],
        mime_type=row["mime_type"],
        extension=row["extension"],
        content_hash=row["content_hash"],
        notes=row.get("notes"),
        created_at=_aware(row["created_at"]),
    )


def revision_to_dict(revision: FileRevision) -> Dict[str, Any]:
    return revision.model_dump()
