"""Session lock shared by every handle of a fake database.

A fake database allows one active session at a time, like an exclusive
connection. The lock is used from plain threads (blocking acquire) and from
event loops (polling acquire that never blocks the loop), so it wraps a
threading.Lock rather than an asyncio.Lock.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from fakedata.core.errors import LockCancelledError, LockTimeoutError

logger = logging.getLogger(__name__)

__all__ = ["SessionLock"]


class SessionLock:
    """Exclusive, non-reentrant lock with blocking and asynchronous acquisition.

    The lock has no notion of an owner: ``locked`` is true from a successful
    acquire until the matching release, whoever asks.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        """Whether some handle currently holds the lock."""
        return self._lock.locked()

    def acquire(self, timeout: float | None = None) -> None:
        """Block the calling thread until the lock is acquired.

        Args:
            timeout: Maximum seconds to wait. None waits forever.

        Raises:
            LockTimeoutError: If the lock was not acquired within ``timeout``.
        """
        logger.debug("Waiting for session lock (timeout=%s)", timeout)
        acquired = self._lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            raise LockTimeoutError(timeout)
        logger.debug("Session lock acquired")

    async def acquire_async(
        self,
        *,
        cancel: asyncio.Event | None = None,
        timeout: float | None = None,
        poll_interval: float = 0.005,
    ) -> None:
        """Wait for the lock without blocking the event loop.

        Polls a non-blocking acquire, sleeping ``poll_interval`` between
        attempts. The cancel event and the deadline are checked before every
        attempt, so an already-set event fails without acquiring. Cancelling
        the awaiting task raises asyncio.CancelledError from the sleep; in
        every failure case the lock is left untouched.

        Args:
            cancel: Optional event that abandons the wait when set.
            timeout: Maximum seconds to wait. None waits forever.
            poll_interval: Seconds between acquisition attempts.

        Raises:
            LockCancelledError: If ``cancel`` was set before acquisition.
            LockTimeoutError: If the lock was not acquired within ``timeout``.
        """
        clock = asyncio.get_running_loop().time
        deadline = None if timeout is None else clock() + timeout
        logger.debug("Waiting for session lock asynchronously (timeout=%s)", timeout)

        while True:
            if cancel is not None and cancel.is_set():
                logger.debug("Session lock wait cancelled")
                raise LockCancelledError()
            if self._lock.acquire(blocking=False):
                logger.debug("Session lock acquired")
                return
            if deadline is not None and clock() >= deadline:
                raise LockTimeoutError(timeout)
            await asyncio.sleep(poll_interval)

    def release(self) -> None:
        """Release the lock.

        Raises:
            RuntimeError: If the lock is not held.
        """
        self._lock.release()
        logger.debug("Session lock released")
