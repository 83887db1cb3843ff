from datetime import UTC, datetime
from uuid import uuid4

from pydantic import Field, model_validator
from typing_extensions import Self

from prodrec.domain.record.model.value import RecordStatus
from prodrec.domain.shared.error import (
    AlreadyFinalizedError,
    ForbiddenError,
    ValidationError,
)
from prodrec.domain.shared.model.aggregate import Aggregate

RECORD_CODE_MAX_LENGTH = 100
SHOP_CODE_MAX_LENGTH = 50
FINALIZED_BY_MAX_LENGTH = 255


class Record(Aggregate):
    """A versioned product record.

    The record is the authority for ``current_version`` and ``status``. Its
    file revisions live in their own table and point back by ``record_id``.
    """

    id: str
    record_code: str
    shop_code: str
    current_version: int = Field(default=1, ge=1)
    status: RecordStatus = RecordStatus.DRAFT
    description: str | None = None
    finalized_at: datetime | None = None
    finalized_by: str | None = None
    finalization_notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def _finalization_fields_together(self) -> Self:
        if (self.finalized_at is None) != (self.finalized_by is None):
            raise ValueError("finalized_at and finalized_by must be set together")
        return self

    @classmethod
    def new(
        cls,
        record_code: str,
        shop_code: str,
        description: str | None = None,
    ) -> "Record":
        _require_code("record_code", record_code, RECORD_CODE_MAX_LENGTH)
        _require_code("shop_code", shop_code, SHOP_CODE_MAX_LENGTH)
        now = datetime.now(UTC)
        return cls(
            id=str(uuid4()),
            record_code=record_code,
            shop_code=shop_code,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_final(self) -> bool:
        return self.status == RecordStatus.FINAL

    def _require_open(self) -> None:
        if self.is_final:
            raise AlreadyFinalizedError(f"Record '{self.record_code}' is finalized and cannot be modified")

    def advance_version(self) -> int:
        """Open the next version bucket and mark the record MODIFIED."""
        self._require_open()
        self.current_version += 1
        self.status = RecordStatus.MODIFIED
        self.updated_at = datetime.now(UTC)
        return self.current_version

    def finalize(self, finalized_by: str, notes: str | None = None) -> None:
        self._require_open()
        if not finalized_by or not finalized_by.strip():
            raise ValidationError("finalized_by is required", field="finalized_by")
        if len(finalized_by) > FINALIZED_BY_MAX_LENGTH:
            raise ValidationError(
                f"finalized_by must be at most {FINALIZED_BY_MAX_LENGTH} characters",
                field="finalized_by",
            )
        now = datetime.now(UTC)
        self.finalized_at = now
        self.finalized_by = finalized_by
        self.finalization_notes = notes
        self.status = RecordStatus.FINAL
        self.updated_at = now

    def ensure_deletable(self) -> None:
        if self.is_final:
            raise ForbiddenError(
                f"Record '{self.record_code}' is finalized and cannot be deleted",
                code="CANNOT_DELETE_FINALIZED_RECORD",
            )


def _require_code(field: str, value: str, max_length: int) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field} must not be empty", field=field)
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
