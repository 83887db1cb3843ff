"""Runs one command or query handler from a CLI invocation.

Each invocation builds the container, migrates the database when configured
to, runs the handler inside a fresh UOW scope and maps domain errors to exit
codes.
"""

import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import Any, TypeVar

import logfire
from rich.markup import escape

from prodrec.application.di import create_container
from prodrec.cli.console import get_console
from prodrec.config import Config, configure_logging
from prodrec.domain.record.model.value import FileUpload
from prodrec.domain.shared.error import (
    ConflictError,
    ForbiddenError,
    InfrastructureError,
    InvalidFileError,
    InvalidStateError,
    NotFoundError,
    ProdRecError,
    ValidationError,
)
from prodrec.infrastructure.persistence.migrate import run_migrations
from prodrec.util.di.scope import Scope

R = TypeVar("R")

EXIT_VALIDATION = 2
EXIT_CONFLICT = 3
EXIT_NOT_FOUND = 4
EXIT_INFRASTRUCTURE = 5

_EXIT_CODES: list[tuple[type[ProdRecError], int]] = [
    (NotFoundError, EXIT_NOT_FOUND),
    (ValidationError, EXIT_VALIDATION),
    (InvalidFileError, EXIT_VALIDATION),
    (ConflictError, EXIT_CONFLICT),
    (InvalidStateError, EXIT_CONFLICT),
    (ForbiddenError, EXIT_CONFLICT),
    (InfrastructureError, EXIT_INFRASTRUCTURE),
]


def exit_code_for(error: ProdRecError) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return 1


def load_uploads(paths: list[Path], mime_type: str | None = None) -> list[FileUpload]:
    """Read files from disk, guessing MIME types from their names unless one is given."""
    uploads = []
    for path in paths:
        content = path.read_bytes()
        guessed = mime_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        uploads.append(
            FileUpload(filename=path.name, content=content, mime_type=guessed, size=len(content))
        )
    return uploads


async def _dispatch(config: Config, handler_type: type[Any], request: Any) -> Any:
    container = create_container(config)
    try:
        async with container(scope=Scope.UOW) as uow_container:
            handler = await uow_container.get(handler_type)
            return await handler.run(request)
    finally:
        await container.close()


def run_handler(handler_type: type[Any], request: Any, config: Config | None = None) -> Any:
    """Run a handler to completion, exiting the process on a domain error."""
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    logfire.configure(
        service_name="prodrec",
        service_version=config.server.version,
        send_to_logfire="if-token-present",
        console=False,
    )

    try:
        if config.database.auto_migrate:
            run_migrations(config.database.url)
        return asyncio.run(_dispatch(config, handler_type, request))
    except ProdRecError as e:
        get_console().error(f"{e.code}: {escape(e.message)}")
        sys.exit(exit_code_for(e))
