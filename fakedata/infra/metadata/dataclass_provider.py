"""Metadata discovery from dataclass field declarations.

Record types are plain dataclasses. Identity and rules are declared with
the ``identity()`` and ``column()`` helpers, which wrap dataclasses.field
and store the declarations in the field's metadata mapping:

    @dataclass
    class WidgetRecord:
        widget_id: int = identity()
        name: str = column(default="", required=True, max_length=100)
        created: str | None = column(default=None, pattern=r"[0-9]{4}-.*Z")

The identity kind comes from the field annotation: ``int`` is a 64-bit
identity, ``int | None`` (or Optional[int]) a nullable one, and
``identity(int32=True)`` narrows either to 32 bits. Any other annotation is
an unsupported identity that never gets auto IDs.
"""

from __future__ import annotations

import dataclasses
import functools
import re
import types
import typing
from typing import Any

from fakedata.core.errors import MetadataError
from fakedata.core.models import (
    FieldValidator,
    IdentityField,
    IdentityKind,
    RecordMetadata,
)
from fakedata.infra.metadata.base import BaseMetadataProvider

# Keys used in dataclasses.field(metadata=...)
IDENTITY_KEY = "fakedata.identity"
INT32_KEY = "fakedata.int32"
REQUIRED_KEY = "fakedata.required"
MAX_LENGTH_KEY = "fakedata.max_length"
PATTERN_KEY = "fakedata.pattern"


def identity(*, int32: bool = False, default: Any = 0, **field_kwargs: Any) -> Any:
    """Declare the identity field of a record dataclass.

    Args:
        int32: Restrict auto IDs to the signed 32-bit range.
        default: Default value; use None for a nullable identity.
        **field_kwargs: Passed through to dataclasses.field.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[IDENTITY_KEY] = True
    metadata[INT32_KEY] = int32
    return dataclasses.field(default=default, metadata=metadata, **field_kwargs)


def column(
    *,
    required: bool = False,
    max_length: int | None = None,
    pattern: str | None = None,
    **field_kwargs: Any,
) -> Any:
    """Declare validation rules for a record dataclass field.

    Args:
        required: Value must not be None or an empty string.
        max_length: Maximum string length.
        pattern: Regular expression the whole string value must match.
        **field_kwargs: Passed through to dataclasses.field (default, ...).
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[REQUIRED_KEY] = required
    if max_length is not None:
        metadata[MAX_LENGTH_KEY] = max_length
    if pattern is not None:
        metadata[PATTERN_KEY] = pattern
    return dataclasses.field(metadata=metadata, **field_kwargs)


def identity_kind_for(annotation: Any, *, int32: bool = False) -> IdentityKind:
    """Map a field annotation to an IdentityKind."""
    nullable = False
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = typing.get_args(annotation)
        non_none = [arg for arg in args if arg is not type(None)]
        nullable = len(non_none) != len(args)
        if len(non_none) != 1:
            return IdentityKind.UNSUPPORTED
        annotation = non_none[0]

    if annotation is not int:
        return IdentityKind.UNSUPPORTED
    if int32:
        return IdentityKind.INT32_NULLABLE if nullable else IdentityKind.INT32
    return IdentityKind.INT64_NULLABLE if nullable else IdentityKind.INT64


class DataclassMetadataProvider(BaseMetadataProvider):
    """Reads identity and rule declarations from dataclass field metadata."""

    def _resolve(self, record_type: type[Any]) -> RecordMetadata:
        name = record_type.__qualname__
        if not dataclasses.is_dataclass(record_type):
            raise MetadataError(f"{name} is not a dataclass")

        try:
            hints = typing.get_type_hints(record_type)
        except NameError as e:
            raise MetadataError(
                f"Cannot resolve field annotations of {name}: {e}"
            ) from e

        fields = dataclasses.fields(record_type)

        identity_fields = [f for f in fields if f.metadata.get(IDENTITY_KEY)]
        identity_field: IdentityField | None = None
        if len(identity_fields) == 1:
            f = identity_fields[0]
            identity_field = IdentityField(
                name=f.name,
                kind=identity_kind_for(
                    hints.get(f.name, f.type), int32=bool(f.metadata.get(INT32_KEY))
                ),
            )

        validators: list[FieldValidator] = []
        for f in fields:
            validator = _field_validator(name, f)
            if validator.has_rules:
                validators.append(validator)

        return RecordMetadata(
            record_type=record_type,
            clone=self.clone,
            identity=identity_field,
            validators=tuple(validators),
        )


def _field_validator(type_name: str, f: dataclasses.Field[Any]) -> FieldValidator:
    max_length = f.metadata.get(MAX_LENGTH_KEY)
    if max_length is not None and (
        isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 0
    ):
        raise MetadataError(
            f"{type_name}.{f.name}: max_length must be a non-negative integer, "
            f"got {max_length!r}"
        )
    try:
        return FieldValidator(
            field_name=f.name,
            required=bool(f.metadata.get(REQUIRED_KEY, False)),
            max_length=max_length,
            pattern=f.metadata.get(PATTERN_KEY),
        )
    except re.error as e:
        raise MetadataError(f"{type_name}.{f.name}: invalid pattern: {e}") from e


@functools.lru_cache(maxsize=1)
def default_provider() -> DataclassMetadataProvider:
    """Process-wide provider used by contexts that do not choose one."""
    return DataclassMetadataProvider()
