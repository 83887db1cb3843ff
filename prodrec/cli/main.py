"""Main CLI application using Cyclopts.

Every command runs in-process against the configured database and blob store.
"""

import cyclopts

from prodrec.cli.commands import init, inspect, record

app = cyclopts.App(
    name="prodrec",
    help="Product record versioning",
)

app.command(init.app, name="init")

app.command(record.create, name="create")
app.command(record.modify, name="modify")
app.command(record.finalize, name="finalize")
app.command(record.delete, name="delete")

app.command(inspect.show, name="show")
app.command(inspect.list_records, name="list")
app.command(inspect.versions, name="versions")
app.command(inspect.history, name="history")
app.command(inspect.download, name="download")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
