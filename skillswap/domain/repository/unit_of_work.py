"""Transaction boundary interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """The request's store transaction.

    Requests normally commit when they finish. Long-lived requests (live
    streams) commit early so they don't hold a store connection while idle.
    Live pushes raised by the request go out only after a commit; a
    rollback drops them.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction and release its connection."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Abandon the current transaction and its pending live pushes."""
        pass
