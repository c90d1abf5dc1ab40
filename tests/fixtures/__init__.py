"""Sample records and contexts shared by the test suite.

Available fixtures:
- WidgetRecord / WidgetDatabaseContext: 64-bit identity, required name of at
  most 100 characters, optional ISO-8601 ``created`` timestamp
- GadgetRecord: nullable 32-bit identity
- LabelRecord: string identity (never auto-assigned)
- PlainWidget: plain class described by WIDGET_YAML for YamlMetadataProvider
- InventoryDatabaseContext: several tables plus an explicitly created
  ``archive`` table, with a fixed first auto ID of 1

Usage:
    from tests.fixtures import WidgetDatabaseContext, WidgetRecord

    database = FakeDatabase.create(WidgetDatabaseContext)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fakedata import DatabaseContext, FakeDataConfig, Table, YamlMetadataProvider
from fakedata.infra.metadata import column, identity

CREATED_PATTERN = (
    r"^[1-2][0-9]{3}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z$"
)


@dataclass
class WidgetRecord:
    widget_id: int = identity()
    name: str = column(default="", required=True, max_length=100)
    created: str | None = column(default=None, pattern=CREATED_PATTERN)
    tags: list[str] = field(default_factory=list)


@dataclass
class GadgetRecord:
    gadget_id: int | None = identity(int32=True, default=None)
    label: str | None = None


@dataclass
class LabelRecord:
    code: str = identity(default="")
    text: str = column(default="", max_length=10)


class PlainWidget:
    """Widget without dataclass metadata; described by WIDGET_YAML."""

    def __init__(
        self, widget_id: int = 0, name: str = "", created: str | None = None
    ) -> None:
        self.widget_id = widget_id
        self.name = name
        self.created = created

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainWidget):
            return NotImplemented
        return (self.widget_id, self.name, self.created) == (
            other.widget_id,
            other.name,
            other.created,
        )


WIDGET_YAML = f"""
records:
  PlainWidget:
    identity:
      field: widget_id
      type: int64
    fields:
      name:
        required: true
        max_length: 100
      created:
        pattern: "{CREATED_PATTERN}"
"""


class WidgetDatabaseContext(DatabaseContext):
    widgets: Table[WidgetRecord]


class PlainWidgetDatabaseContext(DatabaseContext):
    metadata_provider = YamlMetadataProvider.from_string(WIDGET_YAML)

    widgets: Table[PlainWidget]


class InventoryDatabaseContext(DatabaseContext):
    config = FakeDataConfig(first_auto_id=1)

    widgets: Table[WidgetRecord]
    gadgets: Table[GadgetRecord]
    labels: Table[LabelRecord]

    def __init__(self) -> None:
        super().__init__()
        self.archive = self.create_table(WidgetRecord)
