"""Protocol definitions for the collaborators the engine depends on.

The table never inspects record types itself. It asks a
RecordMetadataProvider for the (clone, identity, validators) triple, which
keeps the discovery mechanism (dataclass field metadata, a YAML descriptor
table, hand-written registrations) out of the core.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fakedata.core.models import FieldValidator, IdentityField, RecordMetadata

T = TypeVar("T")


@runtime_checkable
class RecordMetadataProvider(Protocol):
    """Source of record metadata.

    Implementations must make ``clone`` deep enough that mutating the copy
    never affects the original and vice versa.
    """

    def clone(self, record: T) -> T:
        """Return an independent copy of ``record``."""
        ...

    def identity_field(self, record_type: type[Any]) -> IdentityField | None:
        """Return the identity field, or None unless exactly one is declared."""
        ...

    def validators(self, record_type: type[Any]) -> Sequence[FieldValidator]:
        """Return the declared field validators for ``record_type``."""
        ...

    def metadata(self, record_type: type[Any]) -> RecordMetadata:
        """Return the resolved, cached metadata for ``record_type``."""
        ...
