"""Base class for fake database contexts.

A context is a session handle over one or more tables. Subclasses declare
their tables as annotated attributes; any declared table that the subclass
does not create itself is created when the context is constructed:

    class WidgetDatabaseContext(DatabaseContext):
        widgets: Table[WidgetRecord]

FakeDatabase hands out shallow clones of one canonical context. Every clone
shares the canonical context's SessionLock and Table objects, and tracks on
its own whether it holds the lock. Closing a locked clone (leaving its
``with`` block) unlocks the database.
"""

from __future__ import annotations

import asyncio
import copy
import functools
import logging
import threading
import typing
from types import TracebackType
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from fakedata.core.errors import LockReleaseError, MetadataError
from fakedata.core.protocols import RecordMetadataProvider
from fakedata.infra.config import FakeDataConfig, default_config
from fakedata.infra.locking import SessionLock
from fakedata.infra.metadata.dataclass_provider import default_provider
from fakedata.table import Table

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

R = TypeVar("R")


class DatabaseContext:
    """Base class for a fake database context.

    Class attributes:
        metadata_provider: Provider used for this context's tables. Defaults
            to the dataclass field metadata provider.
        config: Configuration for this context's database. Defaults to
            FakeDataConfig loaded from the environment.
    """

    metadata_provider: ClassVar[RecordMetadataProvider | None] = None
    config: ClassVar[FakeDataConfig | None] = None

    def __init__(self) -> None:
        self._config = type(self).config or default_config()
        self._provider = type(self).metadata_provider or default_provider()
        self._session_lock = SessionLock()
        self._holds_lock = False
        self._release_guard = threading.Lock()
        for name, record_type in _declared_tables(type(self)).items():
            if not isinstance(getattr(self, name, None), Table):
                setattr(self, name, self.create_table(record_type))

    def create_table(
        self, record_type: type[R], provider: RecordMetadataProvider | None = None
    ) -> Table[R]:
        """Create a table bound to this context's lock.

        Args:
            record_type: Type of the records stored by the table.
            provider: Metadata provider overriding the context's provider.
        """
        return Table(
            record_type,
            self._session_lock,
            provider or self._provider,
            first_auto_id=self._config.pick_first_auto_id(),
        )

    @property
    def holds_lock(self) -> bool:
        """Whether this handle currently holds the database lock."""
        return self._holds_lock

    @property
    def is_locked(self) -> bool:
        """Whether any handle of this database currently holds the lock."""
        return self._session_lock.locked

    def close(self) -> None:
        """Unlock the database.

        Releasing a handle that does not hold the lock (a second close, or a
        handle that was never locked) leaves the lock untouched. It is
        logged as a warning, or raises LockReleaseError when the config has
        ``strict_release`` set.
        """
        with self._release_guard:
            held = self._holds_lock
            self._holds_lock = False
        if not held:
            if self._config.strict_release:
                raise LockReleaseError()
            logger.warning(
                "Ignoring release of %s: handle does not hold the lock",
                type(self).__name__,
            )
            return
        self._session_lock.release()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _lock(self, timeout: float | None = None) -> None:
        self._session_lock.acquire(
            timeout if timeout is not None else self._config.lock_timeout_seconds
        )
        self._holds_lock = True

    async def _lock_async(
        self, cancel: asyncio.Event | None = None, timeout: float | None = None
    ) -> None:
        await self._session_lock.acquire_async(
            cancel=cancel,
            timeout=timeout if timeout is not None else self._config.lock_timeout_seconds,
            poll_interval=self._config.lock_poll_interval,
        )
        self._holds_lock = True

    def _shallow_clone(self) -> Self:
        """Create a handle sharing this context's lock and tables."""
        clone = copy.copy(self)
        clone._holds_lock = False
        clone._release_guard = threading.Lock()
        return clone


@functools.lru_cache(maxsize=None)
def _declared_tables(context_type: type[DatabaseContext]) -> dict[str, type[Any]]:
    """Map table attribute names to record types for a context class."""
    try:
        hints = typing.get_type_hints(context_type)
    except NameError as e:
        raise MetadataError(
            f"Cannot resolve table annotations of {context_type.__qualname__}: {e}"
        ) from e

    tables: dict[str, type[Any]] = {}
    for name, hint in hints.items():
        if typing.get_origin(hint) is not Table:
            continue
        (record_type,) = typing.get_args(hint)
        tables[name] = record_type
    return tables
