"""Transactional read-check-write helper with conflict retries."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from partnerdesk.services.config import settings
from partnerdesk.services.errors import TransactionConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Version-counter mismatches and lock/serialization failures are safe to replay
RETRYABLE_ERRORS = (StaleDataError, OperationalError)

# Store failures, including driver connection faults SQLAlchemy does not wrap
STORE_FAULTS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


async def run_in_transaction(
    session_factory: async_sessionmaker[AsyncSession],
    work: Callable[[AsyncSession], Awaitable[T]],
    max_attempts: int | None = None,
    retry_on: tuple[type[BaseException], ...] = RETRYABLE_ERRORS,
) -> T:
    """Run `work` inside a single transaction, retrying on write conflicts.

    Every attempt gets a fresh session, so `work` re-reads its rows and
    re-evaluates its checks; nothing from a failed attempt is reused.
    Exceptions raised by `work` itself roll the transaction back and propagate.

    Args:
        session_factory: Factory producing AsyncSession objects
        work: Coroutine function receiving the session; its result is returned
        max_attempts: Attempts before giving up (default: TRANSACTION_MAX_ATTEMPTS)
        retry_on: Exception types that trigger another attempt

    Returns:
        Whatever `work` returns from the committed attempt

    Raises:
        TransactionConflictError: Version conflicts persisted for every attempt
        OperationalError: Lock or connection failures persisted for every attempt
    """
    attempts = max_attempts or settings.transaction_max_attempts
    for attempt in range(1, attempts + 1):
        try:
            async with session_factory() as session:
                async with session.begin():
                    result = await work(session)
            return result
        except retry_on as e:
            if attempt >= attempts:
                logger.error(f"Transaction failed after {attempt} attempts: {e}")
                if isinstance(e, StaleDataError):
                    raise TransactionConflictError() from e
                raise
            logger.warning(f"Transaction conflict on attempt {attempt}/{attempts}, retrying: {e}")
    raise AssertionError("unreachable")


__all__ = ["run_in_transaction", "RETRYABLE_ERRORS", "STORE_FAULTS"]
