from __future__ import annotations

from abc import abstractmethod
from typing import List, Protocol

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.value import RecordFilter
from prodrec.domain.shared.port import Port


class RecordRepository(Port, Protocol):
    """Transactional access to records and their file revisions.

    Every method runs inside the transaction of the unit of work that owns
    the repository.
    """

    @abstractmethod
    async def get(self, record_id: str) -> Record | None: ...

    @abstractmethod
    async def get_for_update(self, record_id: str) -> Record | None:
        """Read a record and hold it against concurrent writers until commit."""
        ...

    @abstractmethod
    async def get_by_code(self, record_code: str) -> Record | None: ...

    @abstractmethod
    async def add(self, record: Record) -> None:
        """Insert a new record. Raises DuplicateCodeError on a code clash."""
        ...

    @abstractmethod
    async def update(self, record: Record, *, expected_version: int) -> None:
        """Persist record state if its stored version still equals expected_version.

        Raises ConcurrentModificationError otherwise.
        """
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Remove a record together with all of its revisions."""
        ...

    @abstractmethod
    async def list(
        self,
        record_filter: RecordFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Record]: ...

    @abstractmethod
    async def count(self, record_filter: RecordFilter) -> int: ...

    @abstractmethod
    async def add_revision(self, revision: FileRevision) -> None:
        """Insert a revision. Raises FilenameTakenError when its bucket already has the name."""
        ...

    @abstractmethod
    async def get_revision(self, revision_id: str) -> FileRevision | None: ...

    @abstractmethod
    async def list_revisions(
        self,
        record_id: str,
        *,
        version: int | None = None,
        ascending: bool = False,
    ) -> List[FileRevision]:
        """Revisions ordered by (version, created_at), newest first unless ascending."""
        ...

    @abstractmethod
    async def list_filenames(self, record_id: str, version: int) -> set[str]: ...
