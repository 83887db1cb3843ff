from abc import abstractmethod
from typing import Protocol

from prodrec.domain.record.model.value import StoredBlob
from prodrec.domain.shared.port import Port


class BlobStoragePort(Port, Protocol):
    """Opaque byte storage. Holds no authority over record state."""

    @abstractmethod
    def locate(self, record_id: str, version: int, filename: str) -> str:
        """Storage path a blob for this bucket and filename is written to."""
        ...

    @abstractmethod
    async def put(
        self,
        record_id: str,
        version: int,
        filename: str,
        content: bytes,
    ) -> StoredBlob:
        """Write content atomically into the record's version bucket."""
        ...

    @abstractmethod
    async def get(self, storage_path: str) -> bytes: ...

    @abstractmethod
    async def delete(self, storage_path: str) -> None:
        """Remove a blob. A missing blob is not an error."""
        ...

    @abstractmethod
    def hash(self, content: bytes) -> str: ...
