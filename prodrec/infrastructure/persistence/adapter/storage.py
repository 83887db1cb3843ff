import hashlib
import logging
import tempfile
from pathlib import Path, PurePosixPath

from prodrec.domain.record.model.value import StoredBlob
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.shared.error import BlobStorageError, NotFoundError

logger = logging.getLogger(__name__)


class LocalBlobStorageAdapter(BlobStoragePort):
    """Local filesystem implementation of BlobStoragePort.

    Layout: ``<base_path>/records/<record_id>/v<version>/<filename>``. Storage
    paths handed out are relative to ``base_path`` and always use ``/``.
    """

    def __init__(self, base_path: str) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_name(self, name: str) -> str:
        """Reject anything that is not a single plain path segment."""
        safe_name = Path(name).name
        if not safe_name or safe_name != name or safe_name in (".", ".."):
            raise ValueError(f"Invalid path segment: {name}")
        return safe_name

    def _resolve(self, storage_path: str) -> Path:
        """Resolve a storage path inside base_path, rejecting path traversal attempts."""
        target = self.base_path / PurePosixPath(storage_path)
        if not target.resolve().is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Invalid storage path: {storage_path}")
        return target

    def locate(self, record_id: str, version: int, filename: str) -> str:
        if version < 1:
            raise ValueError(f"Invalid version: {version}")
        return str(
            PurePosixPath(
                "records", self._safe_name(record_id), f"v{version}", self._safe_name(filename)
            )
        )

    async def put(
        self,
        record_id: str,
        version: int,
        filename: str,
        content: bytes,
    ) -> StoredBlob:
        storage_path = self.locate(record_id, version, filename)
        target = self._resolve(storage_path)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write: write to temp file then rename
            fd, tmp_path = tempfile.mkstemp(dir=target.parent)
            try:
                with open(fd, "wb") as f:
                    f.write(content)
                Path(tmp_path).replace(target)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise BlobStorageError(f"Failed to write {storage_path}: {e}") from e

        logger.debug("Stored %d bytes at %s", len(content), storage_path)
        return StoredBlob(
            storage_path=storage_path,
            size=len(content),
            content_hash=self.hash(content),
        )

    async def get(self, storage_path: str) -> bytes:
        target = self._resolve(storage_path)
        try:
            return target.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"File not found: {storage_path}", code="FILE_NOT_FOUND") from e
        except OSError as e:
            raise BlobStorageError(f"Failed to read {storage_path}: {e}") from e

    async def delete(self, storage_path: str) -> None:
        target = self._resolve(storage_path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            raise BlobStorageError(f"Failed to delete {storage_path}: {e}") from e
        self._prune(target.parent)

    def _prune(self, directory: Path) -> None:
        """Remove empty version and record directories left behind by a delete."""
        stop = (self.base_path / "records").resolve()
        current = directory.resolve()
        while current != stop and current.is_relative_to(stop):
            try:
                current.rmdir()
            except OSError:
                # Not empty (or already gone); nothing above it can be pruned either
                return
            current = current.parent

    def hash(self, content: bytes) -> str:
        digest = hashlib.md5(content, usedforsecurity=False).hexdigest()
        return f"md5:{digest}"
