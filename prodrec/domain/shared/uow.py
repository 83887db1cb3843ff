from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class UoW(ABC):
    """Explicit transaction handle.

    ``async with uow:`` opens one transaction; leaving the block commits on
    success and rolls back when the block raised. A handle may be entered
    again after it has been closed, but never re-entered while open.
    """

    @abstractmethod
    async def begin(self) -> None: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> Self:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc: BaseException | None = None,
        tb: TracebackType | None = None,
    ) -> None:
        await (self.rollback() if exc else self.commit())
