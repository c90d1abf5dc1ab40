"""Record metadata model.

These types are what the engine knows about a record type: how to clone it,
which field (if any) is its auto-assignable identity, and which rules its
fields must satisfy. How the declarations are discovered is up to a
RecordMetadataProvider.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from fakedata.core.errors import RecordValidationError

if TYPE_CHECKING:
    from collections.abc import Callable


INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class IdentityKind(Enum):
    """Value type of an identity field, resolved once per record type.

    Only the four integer kinds get auto IDs; UNSUPPORTED identities are
    left alone.
    """

    INT32 = "int32"
    INT32_NULLABLE = "int32?"
    INT64 = "int64"
    INT64_NULLABLE = "int64?"
    UNSUPPORTED = "unsupported"

    @property
    def auto_assignable(self) -> bool:
        return self is not IdentityKind.UNSUPPORTED

    @property
    def nullable(self) -> bool:
        return self in (IdentityKind.INT32_NULLABLE, IdentityKind.INT64_NULLABLE)

    @property
    def default(self) -> int | None:
        """Value that marks the identity as unset."""
        return None if self.nullable else 0

    @property
    def maximum(self) -> int:
        if self in (IdentityKind.INT32, IdentityKind.INT32_NULLABLE):
            return INT32_MAX
        return INT64_MAX

    @classmethod
    def parse(cls, name: str) -> IdentityKind:
        """Parse a kind name such as "int64" or "int32?"."""
        for kind in cls:
            if kind.value == name:
                return kind
        raise ValueError(f"Unknown identity type '{name}'")


@dataclass(frozen=True)
class IdentityField:
    """The single field designated as a record type's identity.

    Attributes:
        name: Attribute name on the record.
        kind: Declared value type of the field.
    """

    name: str
    kind: IdentityKind

    def get(self, record: object) -> Any:
        return getattr(record, self.name)

    def set(self, record: object, value: int) -> None:
        setattr(record, self.name, value)

    def is_unset(self, record: object) -> bool:
        value = self.get(record)
        if self.kind.nullable:
            return value is None
        return value == 0


@dataclass(frozen=True)
class FieldValidator:
    """Declared rules for one record field.

    Attributes:
        field_name: Attribute name on the record.
        required: Value must not be None (or an empty string).
        max_length: Maximum string length, or None for no bound.
        pattern: Regular expression the whole string must match, or None.
    """

    field_name: str
    required: bool = False
    max_length: int | None = None
    pattern: str | None = None
    _compiled: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.pattern is not None:
            object.__setattr__(self, "_compiled", re.compile(self.pattern))

    @property
    def has_rules(self) -> bool:
        return self.required or self.max_length is not None or self.pattern is not None

    def validate(self, record: object) -> None:
        """Check the field on ``record``.

        Raises:
            RecordValidationError: On the first violated rule.
        """
        value = getattr(record, self.field_name, None)

        if value is None or value == "":
            if self.required:
                raise RecordValidationError(
                    self.field_name, "required", f"{self.field_name} must not be empty."
                )
            if value is None:
                return

        if not isinstance(value, str):
            return

        if self.max_length is not None and len(value) > self.max_length:
            raise RecordValidationError(
                self.field_name,
                "max_length",
                f"{self.field_name} is too long "
                f"(length {len(value)}, max length {self.max_length}).",
            )
        if self._compiled is not None and self._compiled.fullmatch(value) is None:
            raise RecordValidationError(
                self.field_name,
                "pattern",
                f"{self.field_name} does not match the regex '{self.pattern}'.",
            )


@dataclass(frozen=True)
class RecordMetadata:
    """Resolved metadata for one record type.

    Attributes:
        record_type: The record class.
        clone: Function returning an independent copy of a record.
        identity: The identity field, or None when the type does not declare
            exactly one.
        validators: Field validators, in declaration order.
    """

    record_type: type
    clone: Callable[[Any], Any]
    identity: IdentityField | None = None
    validators: tuple[FieldValidator, ...] = ()

    def validate(self, record: object) -> None:
        for validator in self.validators:
            validator.validate(record)
