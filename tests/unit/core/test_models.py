"""Unit tests for record metadata models in fakedata/core/models.py."""

from __future__ import annotations

import copy
from dataclasses import dataclass

import pytest

from fakedata.core.errors import RecordValidationError
from fakedata.core.models import (
    INT32_MAX,
    INT64_MAX,
    FieldValidator,
    IdentityField,
    IdentityKind,
    RecordMetadata,
)


@dataclass
class Item:
    item_id: int | None = 0
    name: str | None = None
    count: int | None = None


class TestIdentityKind:
    """Tests for IdentityKind properties."""

    @pytest.mark.parametrize(
        ("kind", "default", "maximum"),
        [
            (IdentityKind.INT32, 0, INT32_MAX),
            (IdentityKind.INT32_NULLABLE, None, INT32_MAX),
            (IdentityKind.INT64, 0, INT64_MAX),
            (IdentityKind.INT64_NULLABLE, None, INT64_MAX),
        ],
    )
    def test_integer_kinds(
        self, kind: IdentityKind, default: int | None, maximum: int
    ) -> None:
        assert kind.auto_assignable is True
        assert kind.default == default
        assert kind.maximum == maximum

    def test_unsupported_is_not_auto_assignable(self) -> None:
        assert IdentityKind.UNSUPPORTED.auto_assignable is False

    def test_parse(self) -> None:
        assert IdentityKind.parse("int32?") is IdentityKind.INT32_NULLABLE
        assert IdentityKind.parse("int64") is IdentityKind.INT64

    def test_parse_unknown_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown identity type 'uuid'"):
            IdentityKind.parse("uuid")


class TestIdentityField:
    """Tests for IdentityField.is_unset."""

    def test_zero_is_unset_for_non_nullable(self) -> None:
        field = IdentityField("item_id", IdentityKind.INT64)
        assert field.is_unset(Item(item_id=0)) is True
        assert field.is_unset(Item(item_id=7)) is False

    def test_none_is_unset_for_nullable(self) -> None:
        field = IdentityField("item_id", IdentityKind.INT64_NULLABLE)
        assert field.is_unset(Item(item_id=None)) is True

    def test_zero_is_a_real_value_for_nullable(self) -> None:
        """A nullable identity holding 0 was set by the caller."""
        field = IdentityField("item_id", IdentityKind.INT32_NULLABLE)
        assert field.is_unset(Item(item_id=0)) is False

    def test_set(self) -> None:
        item = Item()
        IdentityField("item_id", IdentityKind.INT64).set(item, 42)
        assert item.item_id == 42


class TestFieldValidator:
    """Tests for FieldValidator rule evaluation."""

    def test_required_rejects_none(self) -> None:
        validator = FieldValidator("name", required=True)
        with pytest.raises(RecordValidationError) as exc_info:
            validator.validate(Item(name=None))
        assert exc_info.value.field_name == "name"
        assert exc_info.value.rule == "required"

    def test_required_rejects_empty_string(self) -> None:
        validator = FieldValidator("name", required=True)
        with pytest.raises(RecordValidationError, match="name must not be empty"):
            validator.validate(Item(name=""))

    def test_required_accepts_value(self) -> None:
        FieldValidator("name", required=True).validate(Item(name="x"))

    def test_max_length_boundary(self) -> None:
        validator = FieldValidator("name", max_length=3)
        validator.validate(Item(name="abc"))
        with pytest.raises(RecordValidationError, match=r"length 4, max length 3"):
            validator.validate(Item(name="abcd"))

    def test_pattern_must_match_whole_value(self) -> None:
        validator = FieldValidator("name", pattern=r"[a-z]+")
        validator.validate(Item(name="abc"))
        with pytest.raises(RecordValidationError) as exc_info:
            validator.validate(Item(name="abc1"))
        assert exc_info.value.rule == "pattern"

    def test_optional_none_skips_length_and_pattern(self) -> None:
        validator = FieldValidator("name", max_length=0, pattern=r"x")
        validator.validate(Item(name=None))

    def test_string_rules_ignore_non_strings(self) -> None:
        validator = FieldValidator("count", max_length=1, pattern=r"x")
        validator.validate(Item(count=12345))

    def test_has_rules(self) -> None:
        assert FieldValidator("name").has_rules is False
        assert FieldValidator("name", max_length=5).has_rules is True


class TestRecordMetadata:
    """Tests for RecordMetadata.validate."""

    def test_first_failure_is_reported(self) -> None:
        metadata = RecordMetadata(
            record_type=Item,
            clone=copy.deepcopy,
            validators=(
                FieldValidator("name", required=True),
                FieldValidator("count", required=True),
            ),
        )
        with pytest.raises(RecordValidationError) as exc_info:
            metadata.validate(Item())
        assert exc_info.value.field_name == "name"

    def test_no_validators_accepts_anything(self) -> None:
        RecordMetadata(record_type=Item, clone=copy.deepcopy).validate(Item())
