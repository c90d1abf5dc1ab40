"""Metadata from a YAML descriptor table.

For record classes that cannot carry dataclass field metadata (plain
classes, third-party models), identity and rules can be declared in a YAML
document instead:

    records:
      WidgetRecord:
        identity:
          field: widget_id
          type: int64        # int32, int32?, int64, int64?, or any other name
        fields:
          name:
            required: true
            max_length: 100
          created:
            pattern: "[1-2][0-9]{3}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z"

Record types are looked up by qualified name, then by "module.qualname".
A type missing from the table is an error, so typos surface immediately.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import yaml

from fakedata.core.errors import MetadataError
from fakedata.core.models import (
    FieldValidator,
    IdentityField,
    IdentityKind,
    RecordMetadata,
)
from fakedata.infra.metadata.base import BaseMetadataProvider

if TYPE_CHECKING:
    from pathlib import Path

_ALLOWED_TOP_LEVEL_FIELDS = frozenset({"records"})
_ALLOWED_RECORD_FIELDS = frozenset({"identity", "fields"})
_ALLOWED_IDENTITY_FIELDS = frozenset({"field", "type"})
_ALLOWED_RULE_FIELDS = frozenset({"required", "max_length", "pattern"})


class YamlMetadataProvider(BaseMetadataProvider):
    """Serves record metadata from a parsed YAML descriptor table."""

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize from an already-parsed descriptor mapping.

        Args:
            data: Mapping with a top-level ``records`` key.

        Raises:
            MetadataError: If the mapping does not follow the schema.
        """
        super().__init__()
        _check_unknown(data, _ALLOWED_TOP_LEVEL_FIELDS, "descriptor table")
        records = data.get("records") or {}
        if not isinstance(records, dict):
            raise MetadataError(
                f"records must be a mapping, got {type(records).__name__}"
            )
        self._descriptors: dict[str, tuple[IdentityField | None, tuple[FieldValidator, ...]]] = {
            str(name): _parse_record(str(name), descriptor)
            for name, descriptor in records.items()
        }

    @classmethod
    def from_string(cls, content: str) -> YamlMetadataProvider:
        """Parse a YAML descriptor table.

        Raises:
            MetadataError: If the YAML is invalid or does not follow the schema.
        """
        return cls(_parse_yaml(content))

    @classmethod
    def from_path(cls, path: Path) -> YamlMetadataProvider:
        """Load a YAML descriptor table from a file.

        Raises:
            MetadataError: If the file cannot be read, the YAML is invalid,
                or it does not follow the schema.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise MetadataError(f"Failed to read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise MetadataError(f"Failed to decode {path}: {e}") from e
        return cls.from_string(content)

    def _resolve(self, record_type: type[Any]) -> RecordMetadata:
        qualname = record_type.__qualname__
        descriptor = self._descriptors.get(qualname) or self._descriptors.get(
            f"{record_type.__module__}.{qualname}"
        )
        if descriptor is None:
            raise MetadataError(f"No metadata declared for record type '{qualname}'")
        identity, validators = descriptor
        return RecordMetadata(
            record_type=record_type,
            clone=self.clone,
            identity=identity,
            validators=validators,
        )


def _parse_yaml(content: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise MetadataError(f"Invalid YAML syntax in descriptor table: {e}") from e

    # Handle empty document or document with only comments
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise MetadataError(
            f"Descriptor table must be a YAML mapping, got {type(data).__name__}"
        )
    return data


def _check_unknown(data: dict[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown_fields = set(data.keys()) - allowed
    if unknown_fields:
        # Convert to str to handle non-string YAML keys (null, integers)
        first_unknown = sorted(str(k) for k in unknown_fields)[0]
        raise MetadataError(f"Unknown field '{first_unknown}' in {where}")


def _parse_record(
    name: str, descriptor: object
) -> tuple[IdentityField | None, tuple[FieldValidator, ...]]:
    if descriptor is None:
        return None, ()
    if not isinstance(descriptor, dict):
        raise MetadataError(f"records.{name} must be a mapping")
    _check_unknown(descriptor, _ALLOWED_RECORD_FIELDS, f"records.{name}")

    identity = _parse_identity(name, descriptor.get("identity"))

    fields = descriptor.get("fields") or {}
    if not isinstance(fields, dict):
        raise MetadataError(f"records.{name}.fields must be a mapping")
    validators = tuple(
        _parse_rules(f"records.{name}.fields.{field_name}", str(field_name), rules)
        for field_name, rules in fields.items()
    )
    return identity, tuple(v for v in validators if v.has_rules)


def _parse_identity(name: str, identity: object) -> IdentityField | None:
    where = f"records.{name}.identity"
    if identity is None:
        return None
    if isinstance(identity, str):
        identity = {"field": identity}
    if not isinstance(identity, dict):
        raise MetadataError(f"{where} must be a field name or a mapping")
    _check_unknown(identity, _ALLOWED_IDENTITY_FIELDS, where)

    field_name = identity.get("field")
    if not isinstance(field_name, str) or not field_name:
        raise MetadataError(f"{where}.field must be a non-empty string")

    type_name = identity.get("type", "int64")
    if not isinstance(type_name, str):
        raise MetadataError(f"{where}.type must be a string")
    try:
        kind = IdentityKind.parse(type_name)
    except ValueError:
        # Any other identity type is accepted but never auto-assigned
        kind = IdentityKind.UNSUPPORTED
    return IdentityField(name=field_name, kind=kind)


def _parse_rules(where: str, field_name: str, rules: object) -> FieldValidator:
    if rules is None:
        rules = {}
    if not isinstance(rules, dict):
        raise MetadataError(f"{where} must be a mapping")
    _check_unknown(rules, _ALLOWED_RULE_FIELDS, where)

    required = rules.get("required", False)
    if not isinstance(required, bool):
        raise MetadataError(f"{where}.required must be a boolean")

    max_length = rules.get("max_length")
    if max_length is not None and (
        isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 0
    ):
        raise MetadataError(f"{where}.max_length must be a non-negative integer")

    pattern = rules.get("pattern")
    if pattern is not None and not isinstance(pattern, str):
        raise MetadataError(f"{where}.pattern must be a string")

    try:
        return FieldValidator(
            field_name=field_name,
            required=required,
            max_length=max_length,
            pattern=pattern,
        )
    except re.error as e:
        raise MetadataError(f"{where}.pattern is not a valid regex: {e}") from e
