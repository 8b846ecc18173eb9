"""Base service class for domain services."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError

from skillswap.domain.error import StoreUnavailableError

DEFAULT_STORE_TIMEOUT = 5.0


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    store_timeout: float = DEFAULT_STORE_TIMEOUT

    @asynccontextmanager
    async def store_call(self, operation: str) -> AsyncIterator[None]:
        """Bound a block of store calls by the store timeout.

        Timeouts and connection-level failures surface as
        StoreUnavailableError. Domain errors raised inside the block pass
        through unchanged.

        Args:
            operation: Name reported in logs and in the error
        """
        try:
            async with asyncio.timeout(self.store_timeout):
                yield
        except TimeoutError as e:
            logfire.error(
                "Store call timed out",
                operation=operation,
                timeout=self.store_timeout,
            )
            raise StoreUnavailableError(operation, "timed out") from e
        except (OperationalError, InterfaceError, DisconnectionError, OSError) as e:
            logfire.error(
                "Store call failed", operation=operation, error=str(e)
            )
            raise StoreUnavailableError(operation, type(e).__name__) from e
