"""Command and CommandHandler base classes."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel


class Command(BaseModel): ...


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


@dataclass_transform(kw_only_default=True)
class _HandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls, kw_only=True)
        return cls


class CommandHandler(Generic[C, R], metaclass=_HandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Collaborators are declared as fields and injected by the container:
        class MyHandler(CommandHandler[MyCommand, MyResult]):
            versioning: VersioningService
            uow: UnitOfWork
    """

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
