from pydantic import Field

from prodrec.domain.record.model.value import FileUpload
from prodrec.domain.record.service.filename import (
    EXTENSION_MAX_LENGTH,
    FILENAME_MAX_LENGTH,
    sanitize_filename,
    split_filename,
)
from prodrec.domain.shared.error import InvalidFileError, ValidationError
from prodrec.domain.shared.model.value import ValueObject

DEFAULT_ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "image/jpeg",
        "image/jpg",
        "image/png",
    }
)
DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024  # 10 MiB


class FilePolicy(ValueObject):
    """Upload constraints, injected from configuration per deployment."""

    allowed_mime_types: frozenset[str] = DEFAULT_ALLOWED_MIME_TYPES
    max_size_bytes: int = Field(default=DEFAULT_MAX_SIZE_BYTES, gt=0)

    def check(self, upload: FileUpload) -> None:
        if not upload.filename or not upload.content:
            raise ValidationError("A non-empty file is required", field="file", code="FILE_REQUIRED")
        name = sanitize_filename(upload.filename)
        if set(name) <= {"."}:
            raise ValidationError(f"Invalid filename: {upload.filename}", field="file", code="FILE_REQUIRED")
        if len(name) > FILENAME_MAX_LENGTH:
            raise ValidationError(
                f"Filename must be at most {FILENAME_MAX_LENGTH} characters",
                field="file",
                code="FILENAME_TOO_LONG",
            )
        extension = split_filename(name)[1][1:]
        if len(extension) > EXTENSION_MAX_LENGTH:
            raise InvalidFileError(
                f"File extension must be at most {EXTENSION_MAX_LENGTH} characters",
                code="INVALID_FILE_EXTENSION",
            )

        if upload.size is not None and upload.size != upload.byte_size:
            raise InvalidFileError(
                f"Declared size {upload.size} does not match content length {upload.byte_size}",
                code="FILE_SIZE_MISMATCH",
            )
        if upload.byte_size > self.max_size_bytes:
            raise InvalidFileError(
                f"File size {upload.byte_size} exceeds maximum {self.max_size_bytes}",
                code="FILE_TOO_LARGE",
            )
        if upload.mime_type not in self.allowed_mime_types:
            raise InvalidFileError(
                f"File type '{upload.mime_type}' not accepted. Allowed: {sorted(self.allowed_mime_types)}",
                code="INVALID_FILE_TYPE",
            )
