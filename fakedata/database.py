"""Fake database entry point.

Usage:
    database = FakeDatabase.create(WidgetDatabaseContext)

    with database.lock() as context:
        context.widgets.add(WidgetRecord(name="Alice"))

    async with await database.lock_async() as context:
        names = [widget.name for widget in context.widgets]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from fakedata.context import DatabaseContext

if TYPE_CHECKING:
    import asyncio

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=DatabaseContext)


class FakeDatabase(Generic[C]):
    """A fake database.

    Wraps one canonical context, which is never handed out. Each lock call
    returns a fresh handle that shares the canonical context's tables and
    lock. Only one handle holds the lock at a time, and the lock is not
    reentrant: locking again while holding a handle waits forever (or until
    the configured timeout).
    """

    def __init__(self, context: C) -> None:
        self._context = context

    @classmethod
    def create(cls, context_type: type[C]) -> FakeDatabase[C]:
        """Create a fake database using the specified context type.

        Args:
            context_type: DatabaseContext subclass with a zero-argument
                constructor.
        """
        logger.debug("Creating fake database for %s", context_type.__qualname__)
        return cls(context_type())

    def lock(self, timeout: float | None = None) -> C:
        """Lock the database.

        Database tables and records should only be accessed while the
        database is locked. Close the returned context (or leave its
        ``with`` block) to unlock the database.

        Args:
            timeout: Maximum seconds to wait. Defaults to the context's
                configured lock timeout (None waits forever).

        Raises:
            LockTimeoutError: If the lock was not acquired in time.
        """
        context = self._context._shallow_clone()
        context._lock(timeout)
        return context

    async def lock_async(
        self, cancel: asyncio.Event | None = None, timeout: float | None = None
    ) -> C:
        """Lock the database without blocking the event loop.

        See lock(). Cancelling the awaiting task abandons the wait with
        asyncio.CancelledError; setting ``cancel`` abandons it with
        LockCancelledError. Either way no lock is taken.

        Args:
            cancel: Optional event that abandons the wait when set.
            timeout: Maximum seconds to wait. Defaults to the context's
                configured lock timeout (None waits forever).

        Raises:
            LockCancelledError: If ``cancel`` was set before acquisition.
            LockTimeoutError: If the lock was not acquired in time.
        """
        context = self._context._shallow_clone()
        await context._lock_async(cancel, timeout)
        return context
