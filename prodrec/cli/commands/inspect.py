"""Read-only commands: show, list, versions, history, download."""

import sys
from pathlib import Path

from prodrec.cli.console import format_time, get_console
from prodrec.cli.util import run_handler
from prodrec.domain.record.model.value import RecordStatus
from prodrec.domain.record.query.download_file import DownloadFile, DownloadFileHandler
from prodrec.domain.record.query.get_record import GetRecord, GetRecordHandler
from prodrec.domain.record.query.list_records import ListRecords, ListRecordsHandler
from prodrec.domain.record.query.list_versions import ListVersions, ListVersionsHandler
from prodrec.domain.record.query.version_history import (
    GetVersionHistory,
    GetVersionHistoryHandler,
)


def show(ref: str, /, *, by_code: bool = False) -> None:
    """Show a record and its files.

    Args:
        ref: Record ID, or record code with --by-code.
        by_code: Treat ref as a record code.
    """
    query = GetRecord(record_code=ref) if by_code else GetRecord(record_id=ref)
    result = run_handler(GetRecordHandler, query)
    console = get_console()
    console.record(result.record)
    if result.files:
        console.files(result.files)
    else:
        console.warning("No files")


def list_records(
    *,
    shop: str | None = None,
    status: RecordStatus | None = None,
    search: str | None = None,
    page: int = 1,
    page_size: int = 10,
) -> None:
    """List records, newest first.

    Args:
        shop: Only records of this shop.
        status: Only records in this status.
        search: Case-sensitive substring of the record code.
        page: Page number, starting at 1.
        page_size: Records per page.
    """
    result = run_handler(
        ListRecordsHandler,
        ListRecords(shop_code=shop, status=status, search=search, page=page, page_size=page_size),
    )
    console = get_console()
    if not result.items:
        console.warning("No records found")
        return

    console.table(
        [
            {
                "id": r.id,
                "code": r.record_code,
                "shop": r.shop_code,
                "version": f"v{r.current_version}",
                "status": r.status,
                "created": format_time(r.created_at),
            }
            for r in result.items
        ],
        [
            ("id", "ID"),
            ("code", "Code"),
            ("shop", "Shop"),
            ("version", "Version"),
            ("status", "Status"),
            ("created", "Created"),
        ],
    )
    console.info(
        f"Page {result.page} of {result.total_pages} ({result.total} record"
        f"{'s' if result.total != 1 else ''})"
    )


def versions(record_id: str, /) -> None:
    """List a record's versions, newest first.

    Args:
        record_id: Record ID.
    """
    result = run_handler(ListVersionsHandler, ListVersions(record_id=record_id))
    get_console().versions(result.versions)


def history(record_id: str, /) -> None:
    """Show a record's version history, oldest first.

    Args:
        record_id: Record ID.
    """
    result = run_handler(GetVersionHistoryHandler, GetVersionHistory(record_id=record_id))
    get_console().versions(result.versions)


def download(record_id: str, file_id: str, /, *, output: Path | None = None) -> None:
    """Write a stored file to disk, or to stdout with --output -.

    Args:
        record_id: Record ID.
        file_id: File ID (see `prodrec show`).
        output: Target path. Defaults to the stored filename in the current directory.
    """
    result = run_handler(DownloadFileHandler, DownloadFile(record_id=record_id, file_id=file_id))

    if output is not None and str(output) == "-":
        sys.stdout.buffer.write(result.content)
        return

    target = output or Path(result.filename)
    if target.is_dir():
        target = target / result.filename
    target.write_bytes(result.content)
    get_console().success(f"Wrote {target} ({result.size} bytes, v{result.version})")
