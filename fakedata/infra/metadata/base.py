"""Shared caching behavior for metadata providers."""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fakedata.core.models import FieldValidator, IdentityField, RecordMetadata

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseMetadataProvider(ABC):
    """Resolves metadata once per record type and caches it.

    Subclasses implement ``_resolve``; everything else is derived from the
    cached RecordMetadata. Records are cloned with copy.deepcopy.
    """

    def __init__(self) -> None:
        self._cache: dict[type, RecordMetadata] = {}
        self._cache_lock = threading.Lock()

    def clone(self, record: T) -> T:
        return copy.deepcopy(record)

    def identity_field(self, record_type: type[Any]) -> IdentityField | None:
        return self.metadata(record_type).identity

    def validators(self, record_type: type[Any]) -> Sequence[FieldValidator]:
        return self.metadata(record_type).validators

    def metadata(self, record_type: type[Any]) -> RecordMetadata:
        with self._cache_lock:
            cached = self._cache.get(record_type)
            if cached is None:
                cached = self._resolve(record_type)
                self._cache[record_type] = cached
                logger.debug(
                    "Resolved metadata for %s: identity=%s validators=%d",
                    record_type.__qualname__,
                    cached.identity,
                    len(cached.validators),
                )
            return cached

    @abstractmethod
    def _resolve(self, record_type: type[Any]) -> RecordMetadata:
        """Build metadata for a record type not yet in the cache.

        Raises:
            MetadataError: If the declarations are invalid.
        """
