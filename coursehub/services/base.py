"""Unit-of-work plumbing shared by the catalog, order and summary services.

Every public service method runs as one transaction: commit on success,
rollback on any failure, bounded by ``STORAGE_TIMEOUT_SECONDS``. Driver
exceptions are translated into the storage error kinds here so nothing above
the service layer sees SQLAlchemy types.
"""
from __future__ import annotations
import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.db.config import STORAGE_TIMEOUT_SECONDS
from coursehub.errors import (
    CourseHubError,
    StorageConflictError,
    StorageTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TIMEOUT_MARKERS = ("database is locked", "lock timeout", "timeout", "timed out")


def _translate(exc: Exception) -> CourseHubError:
    if isinstance(exc, PoolTimeoutError):
        return StorageTimeoutError()
    if isinstance(exc, IntegrityError):
        return StorageConflictError()
    if isinstance(exc, OperationalError):
        text = str(exc.orig).lower() if exc.orig is not None else ""
        if any(marker in text for marker in _TIMEOUT_MARKERS):
            return StorageTimeoutError()
        return StorageConflictError()
    return StorageConflictError()


class BaseService:
    def __init__(
        self, session: AsyncSession, timeout: Optional[float] = None
    ):
        self.session = session
        self.timeout = STORAGE_TIMEOUT_SECONDS if timeout is None else timeout


def transactional(
    method: Callable[..., Awaitable[T]]
) -> Callable[..., Awaitable[T]]:
    """Run a service method as a single committed unit of work."""

    @functools.wraps(method)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        async def unit() -> T:
            result = await method(self, *args, **kwargs)
            await self.session.commit()
            return result

        try:
            return await asyncio.wait_for(unit(), timeout=self.timeout)
        except CourseHubError:
            await self.session.rollback()
            raise
        except asyncio.TimeoutError:
            await self.session.rollback()
            logger.warning(
                "%s exceeded storage timeout of %.1fs",
                method.__qualname__,
                self.timeout,
            )
            raise StorageTimeoutError()
        except (DBAPIError, PoolTimeoutError) as exc:
            await self.session.rollback()
            translated = _translate(exc)
            logger.warning(
                "%s failed with storage error (%s): %s",
                method.__qualname__,
                translated.kind,
                exc,
            )
            raise translated from exc

    return wrapper
