"""Unit tests for LocalBlobStorageAdapter."""

import hashlib
import tempfile
from pathlib import Path

import pytest

from prodrec.domain.shared.error import BlobStorageError, NotFoundError
from prodrec.infrastructure.persistence.adapter.storage import LocalBlobStorageAdapter


class TestLayout:
    def setup_method(self):
        self._tmpdir = tempfile.mkdtemp()
        self.adapter = LocalBlobStorageAdapter(base_path=self._tmpdir)

    def test_locate_is_namespaced_by_record_and_version(self):
        assert self.adapter.locate("rec-1", 3, "report.pdf") == "records/rec-1/v3/report.pdf"

    @pytest.mark.asyncio
    async def test_put_writes_under_root(self):
        blob = await self.adapter.put("rec-1", 1, "report.pdf", b"hello")

        assert blob.storage_path == "records/rec-1/v1/report.pdf"
        assert blob.size == 5
        target = Path(self._tmpdir) / "records" / "rec-1" / "v1" / "report.pdf"
        assert target.read_bytes() == b"hello"

    @pytest.mark.asyncio
    async def test_same_name_in_two_records_does_not_collide(self):
        a = await self.adapter.put("rec-a", 1, "report.pdf", b"a")
        b = await self.adapter.put("rec-b", 1, "report.pdf", b"b")

        assert a.storage_path != b.storage_path
        assert await self.adapter.get(a.storage_path) == b"a"
        assert await self.adapter.get(b.storage_path) == b"b"

    @pytest.mark.asyncio
    async def test_no_temp_files_left_behind(self):
        await self.adapter.put("rec-1", 1, "report.pdf", b"hello")
        bucket = Path(self._tmpdir) / "records" / "rec-1" / "v1"
        assert [p.name for p in bucket.iterdir()] == ["report.pdf"]


class TestRoundTrip:
    def setup_method(self):
        self._tmpdir = tempfile.mkdtemp()
        self.adapter = LocalBlobStorageAdapter(base_path=self._tmpdir)

    @pytest.mark.asyncio
    async def test_bytes_and_digest_survive(self):
        content = bytes(range(256)) * 4
        blob = await self.adapter.put("rec-1", 2, "scan.png", content)

        read_back = await self.adapter.get(blob.storage_path)

        assert read_back == content
        assert blob.content_hash == self.adapter.hash(read_back)
        assert blob.content_hash == "md5:" + hashlib.md5(content).hexdigest()

    @pytest.mark.asyncio
    async def test_get_missing_is_not_found(self):
        with pytest.raises(NotFoundError):
            await self.adapter.get("records/rec-1/v1/nope.pdf")

    @pytest.mark.asyncio
    async def test_delete_prunes_empty_directories(self):
        blob = await self.adapter.put("rec-1", 1, "report.pdf", b"x")
        await self.adapter.delete(blob.storage_path)

        assert not (Path(self._tmpdir) / "records" / "rec-1").exists()
        assert (Path(self._tmpdir) / "records").exists()

    @pytest.mark.asyncio
    async def test_delete_keeps_non_empty_bucket(self):
        a = await self.adapter.put("rec-1", 1, "a.pdf", b"a")
        b = await self.adapter.put("rec-1", 1, "b.pdf", b"b")
        await self.adapter.delete(a.storage_path)

        assert await self.adapter.get(b.storage_path) == b"b"

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self):
        await self.adapter.delete("records/rec-1/v1/nope.pdf")

    @pytest.mark.asyncio
    async def test_write_failure_is_wrapped(self):
        # A regular file where the record directory should go
        (Path(self._tmpdir) / "records").mkdir()
        (Path(self._tmpdir) / "records" / "rec-1").write_bytes(b"")

        with pytest.raises(BlobStorageError):
            await self.adapter.put("rec-1", 1, "report.pdf", b"x")


class TestPathTraversalPrevention:
    """Names and paths with traversal components must be rejected."""

    def setup_method(self):
        self._tmpdir = tempfile.mkdtemp()
        self.adapter = LocalBlobStorageAdapter(base_path=self._tmpdir)

    @pytest.mark.asyncio
    async def test_rejects_parent_directory_filename(self):
        with pytest.raises(ValueError, match="Invalid path segment"):
            await self.adapter.put("rec-1", 1, "../../etc/passwd", b"evil")

    @pytest.mark.asyncio
    async def test_rejects_dotdot_filename(self):
        with pytest.raises(ValueError, match="Invalid path segment"):
            await self.adapter.put("rec-1", 1, "..", b"evil")

    @pytest.mark.asyncio
    async def test_rejects_separator_in_record_id(self):
        with pytest.raises(ValueError, match="Invalid path segment"):
            await self.adapter.put("a/b", 1, "report.pdf", b"evil")

    @pytest.mark.asyncio
    async def test_get_rejects_traversal(self):
        with pytest.raises(ValueError, match="Invalid storage path"):
            await self.adapter.get("../../etc/passwd")

    @pytest.mark.asyncio
    async def test_delete_rejects_traversal(self):
        with pytest.raises(ValueError, match="Invalid storage path"):
            await self.adapter.delete("records/../../outside.txt")
