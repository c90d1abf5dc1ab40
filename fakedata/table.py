"""Fake database table.

A Table owns the records of one type. Records are cloned on the way in and
on the way out, so a caller never holds a reference to a stored instance
(the callbacks of update_where and remove_where are the exception: they see
the live records).

The owning database must be locked when any method of this class is called.
The first auto ID used by the table is arbitrary to help prevent bugs
related to predictable auto IDs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from fakedata.core.errors import AutoIdOverflowError, NotLockedError, NullArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from fakedata.core.models import RecordMetadata
    from fakedata.core.protocols import RecordMetadataProvider
    from fakedata.infra.locking import SessionLock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Table(Generic[T]):
    """A fake database table of records of type ``T``."""

    def __init__(
        self,
        record_type: type[T],
        session_lock: SessionLock,
        provider: RecordMetadataProvider,
        *,
        first_auto_id: int,
    ) -> None:
        """Initialize an empty table.

        Tables are created by DatabaseContext; test code should not need to
        construct one directly.

        Args:
            record_type: Type of the stored records.
            session_lock: Lock of the owning database; must be held for
                every operation.
            provider: Source of the record type's clone function, identity
                field and validators.
            first_auto_id: First value handed out by auto ID assignment.
        """
        self._record_type = record_type
        self._session_lock = session_lock
        self._metadata: RecordMetadata = provider.metadata(record_type)
        self._records: list[T] = []
        self._next_auto_id = first_auto_id
        logger.debug(
            "Created table for %s (first auto ID %d)",
            record_type.__qualname__,
            first_auto_id,
        )

    @property
    def record_type(self) -> type[T]:
        return self._record_type

    def add(self, record: T) -> T:
        """Add a record to the table.

        The record is cloned and, when its identity field is unset, assigned
        the next auto ID before it is validated and stored. The returned
        record is a clone of the stored record and can be used to read the
        assigned ID.

        Raises:
            NullArgumentError: If ``record`` is None.
            NotLockedError: If the database is not locked.
            AutoIdOverflowError: If the auto ID does not fit a 32-bit identity.
            RecordValidationError: If the record violates a field rule.
        """
        if record is None:
            raise NullArgumentError("record")
        self._verify_locked()

        new_record = self._metadata.clone(record)
        self._assign_auto_id(new_record)
        self._metadata.validate(new_record)
        self._records.append(new_record)
        return self._metadata.clone(new_record)

    def add_range(self, records: Iterable[T]) -> list[T]:
        """Add records to the table, in order.

        Every element is checked for None before anything is added. Records
        added before a later record fails validation stay added.

        Returns:
            Clones of the stored records, in input order.
        """
        if records is None:
            raise NullArgumentError("records")
        items = list(records)
        if any(item is None for item in items):
            raise NullArgumentError("records item")
        self._verify_locked()
        return [self.add(item) for item in items]

    def update_where(
        self, condition: Callable[[T], bool], action: Callable[[T], object]
    ) -> int:
        """Update records from the table that match the specified condition.

        ``condition`` and ``action`` receive the stored records themselves.
        Matches are collected before any action runs. Each updated record is
        validated immediately; if the action raises or the result is
        invalid, that record is restored (if it is still stored) and the
        error propagates. Records updated before it stay updated.

        Returns:
            The number of records updated.
        """
        if condition is None:
            raise NullArgumentError("condition")
        if action is None:
            raise NullArgumentError("action")
        self._verify_locked()

        # Callbacks may add or remove records; only the initial matches are visited.
        matches = [record for record in self._records if condition(record)]
        for record in matches:
            original = self._metadata.clone(record)
            try:
                action(record)
                self._metadata.validate(record)
            except Exception:
                self._restore(record, original)
                raise
        return len(matches)

    def _restore(self, record: T, original: T) -> None:
        for index, stored in enumerate(self._records):
            if stored is record:
                self._records[index] = original
                return

    def remove_where(self, condition: Callable[[T], bool]) -> int:
        """Remove records from the table that match the specified condition.

        Returns:
            The number of records removed.
        """
        if condition is None:
            raise NullArgumentError("condition")
        self._verify_locked()

        doomed = {id(record) for record in self._records if condition(record)}
        if doomed:
            self._records = [r for r in self._records if id(r) not in doomed]
        return len(doomed)

    def __iter__(self) -> Iterator[T]:
        """Iterate over clones of the records in the table.

        Records are cloned lazily, in insertion order, from a snapshot taken
        when iteration starts. Use update_where to modify records.
        """
        self._verify_locked()
        return self._iter_clones(list(self._records))

    def _iter_clones(self, records: list[T]) -> Iterator[T]:
        for record in records:
            self._verify_locked()
            yield self._metadata.clone(record)

    def __len__(self) -> int:
        self._verify_locked()
        return len(self._records)

    def get_next_auto_id(self) -> int:
        """Get the next automatic ID for this table."""
        self._verify_locked()
        return self._next_auto_id

    def set_next_auto_id(self, next_auto_id: int) -> None:
        """Set the next automatic ID for this table."""
        if isinstance(next_auto_id, bool) or not isinstance(next_auto_id, int):
            raise TypeError(
                f"next_auto_id must be an integer, got {type(next_auto_id).__name__}"
            )
        self._verify_locked()
        self._next_auto_id = next_auto_id

    def __repr__(self) -> str:
        return f"Table[{self._record_type.__qualname__}]"

    def _assign_auto_id(self, record: T) -> None:
        identity = self._metadata.identity
        if identity is None or not identity.kind.auto_assignable:
            return
        if not identity.is_unset(record):
            return

        auto_id = self._next_auto_id
        if auto_id > identity.kind.maximum:
            raise AutoIdOverflowError(identity.name, auto_id, identity.kind.maximum)
        identity.set(record, auto_id)
        self._next_auto_id = auto_id + 1
        logger.debug(
            "Assigned %s=%d to new %s",
            identity.name,
            auto_id,
            self._record_type.__qualname__,
        )

    def _verify_locked(self) -> None:
        if not self._session_lock.locked:
            raise NotLockedError()
