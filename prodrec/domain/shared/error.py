"""Error hierarchy for prodrec.

Error layers:
- ProdRecError: Base class for all prodrec errors
- DomainError: Business rule violations, validation failures
- InfrastructureError: System-level failures like blob storage or database issues

Callers (CLI, request handlers) map these to their own status vocabulary using
the ``code`` attribute.
"""


class ProdRecError(Exception):
    """Base class for all prodrec errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations)
# =============================================================================


class DomainError(ProdRecError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Record or file revision not found."""

    def __init__(self, message: str, code: str = "NOT_FOUND") -> None:
        super().__init__(message, code=code)


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None, code: str = "VALIDATION_ERROR") -> None:
        super().__init__(message, code=code)
        self.field = field


class InvalidFileError(DomainError):
    """Uploaded file violates the size or type policy."""


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class AlreadyFinalizedError(InvalidStateError):
    """Mutation attempted on a FINAL record."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="RECORD_FINALIZED")


class ForbiddenError(DomainError):
    """Operation is never allowed on the target in its current state."""


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class DuplicateCodeError(ConflictError):
    """A record with the same record code already exists."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CODE_EXISTS")


class FilenameTakenError(ConflictError):
    """The store rejected a filename already used in its version bucket."""


class NameCollisionError(ConflictError):
    """No collision-free filename could be claimed within the retry budget."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="NAME_COLLISION")


class ConcurrentModificationError(ConflictError):
    """The record changed between read and write."""


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(ProdRecError):
    """Base class for infrastructure/system errors."""


class BlobStorageError(InfrastructureError):
    """Blob read, write or delete failed."""
