"""Commands that change records: create, modify, finalize, delete."""

from pathlib import Path

from prodrec.cli.console import get_console
from prodrec.cli.util import load_uploads, run_handler
from prodrec.domain.record.command.create import CreateRecord, CreateRecordHandler
from prodrec.domain.record.command.delete import DeleteRecord, DeleteRecordHandler
from prodrec.domain.record.command.finalize import FinalizeRecord, FinalizeRecordHandler
from prodrec.domain.record.command.modify import ModifyRecord, ModifyRecordHandler


def create(
    record_code: str,
    shop_code: str,
    files: list[Path],
    /,
    *,
    description: str | None = None,
    mime_type: str | None = None,
) -> None:
    """Create a record at v1 from one or more files.

    Args:
        record_code: Unique record code (case-sensitive).
        shop_code: Shop the record belongs to.
        files: Files for the first version.
        description: Free-text description.
        mime_type: MIME type for every file instead of guessing from the name.
    """
    result = run_handler(
        CreateRecordHandler,
        CreateRecord(
            record_code=record_code,
            shop_code=shop_code,
            files=load_uploads(files, mime_type),
            description=description,
        ),
    )
    console = get_console()
    console.success(f"Created {result.record.record_code} ({result.record.id})")
    console.files(result.files)


def modify(
    record_id: str,
    files: list[Path],
    /,
    *,
    notes: str | None = None,
    mime_type: str | None = None,
) -> None:
    """Add a new version to a record.

    Args:
        record_id: Record ID.
        files: Files for the new version.
        notes: Notes stored on every file of this version.
        mime_type: MIME type for every file instead of guessing from the name.
    """
    result = run_handler(
        ModifyRecordHandler,
        ModifyRecord(record_id=record_id, files=load_uploads(files, mime_type), notes=notes),
    )
    console = get_console()
    console.success(f"{result.record.record_code} is now v{result.record.current_version}")
    console.files(result.files)


def finalize(record_id: str, /, *, by: str, notes: str | None = None) -> None:
    """Finalize a record. Finalized records accept no further versions.

    Args:
        record_id: Record ID.
        by: Who is finalizing the record.
        notes: Finalization notes.
    """
    result = run_handler(
        FinalizeRecordHandler,
        FinalizeRecord(record_id=record_id, finalized_by=by, notes=notes),
    )
    get_console().success(
        f"{result.record.record_code} finalized at v{result.record.current_version}"
    )


def delete(record_id: str, /) -> None:
    """Delete a record that is not finalized, with all of its files.

    Args:
        record_id: Record ID.
    """
    run_handler(DeleteRecordHandler, DeleteRecord(record_id=record_id))
    get_console().success(f"Deleted {record_id}")
