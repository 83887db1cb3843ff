"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output. All CLI output
should go through this module.
"""

from datetime import datetime
from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from prodrec.domain.record.model.aggregate import Record
from prodrec.domain.record.model.entity import FileRevision
from prodrec.domain.record.model.view import VersionBucket


def format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def format_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KiB"
    return f"{num_bytes / (1024 * 1024):.1f} MiB"


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[tuple[str, str]],  # (key, header)
        *,
        title: str | None = None,
    ) -> None:
        table = Table(title=title, show_header=True, header_style="bold")
        for _, header in columns:
            table.add_column(header)
        for row in rows:
            table.add_row(*(str(row.get(key, "")) for key, _ in columns))
        self._console.print(table)

    def record(self, record: Record) -> None:
        """Print a record header panel."""
        lines = [
            f"[cyan]Shop:[/cyan] {record.shop_code}    "
            f"[cyan]Status:[/cyan] {record.status}    "
            f"[cyan]Version:[/cyan] v{record.current_version}",
            f"[cyan]Created:[/cyan] {format_time(record.created_at)}    "
            f"[cyan]Updated:[/cyan] {format_time(record.updated_at)}",
        ]
        if record.description:
            lines.extend(["", record.description])
        if record.finalized_by:
            lines.append("")
            lines.append(
                f"[cyan]Finalized:[/cyan] {format_time(record.finalized_at)} "
                f"by {record.finalized_by}"
            )
            if record.finalization_notes:
                lines.append(f"[cyan]Notes:[/cyan] {record.finalization_notes}")

        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{record.record_code}[/bold]",
                subtitle=f"[dim]{record.id}[/dim]",
                border_style="blue",
            )
        )

    def files(self, files: list[FileRevision], *, title: str | None = None) -> None:
        self.table(
            [
                {
                    "id": f.id,
                    "version": f"v{f.version}",
                    "filename": f.filename,
                    "size": format_size(f.file_size_bytes),
                    "mime_type": f.mime_type,
                    "uploaded": format_time(f.created_at),
                }
                for f in files
            ],
            [
                ("id", "File ID"),
                ("version", "Version"),
                ("filename", "Filename"),
                ("size", "Size"),
                ("mime_type", "Type"),
                ("uploaded", "Uploaded"),
            ],
            title=title,
        )

    def versions(self, buckets: list[VersionBucket]) -> None:
        if not buckets:
            self.warning("No versions")
            return
        for bucket in buckets:
            self._console.print(
                f"[bold blue]v{bucket.version}[/bold blue]  "
                f"[dim]{bucket.file_count} file{'s' if bucket.file_count != 1 else ''}, "
                f"first upload {format_time(bucket.earliest_upload_at)}[/dim]"
            )
            for f in bucket.files:
                notes = f"  [dim]{f.notes}[/dim]" if f.notes else ""
                self._console.print(
                    f"    {f.filename}  [dim]{format_size(f.file_size_bytes)}  {f.id}[/dim]{notes}"
                )


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
