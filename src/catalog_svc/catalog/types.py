"""Catalog projection types - what the catalog returns to callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..explores.types import FieldType, InlineError, JoinedTable, RequiredAttributes


class CatalogType(str, Enum):
    """Kind of catalog entry."""
    TABLE = "table"
    FIELD = "field"


@dataclass(frozen=True, slots=True)
class CatalogField:
    """A field as listed in the catalog."""
    name: str
    label: str
    field_type: FieldType
    basic_type: str
    table_name: str
    table_label: str = ""
    description: str | None = None

    # Carried through for search index snapshots
    required_attributes: RequiredAttributes = field(default_factory=dict)

    tags: tuple[str, ...] = ()
    type: CatalogType = CatalogType.FIELD

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "fieldType": self.field_type.value,
            "basicType": self.basic_type,
            "tableName": self.table_name,
            "tableLabel": self.table_label,
            "description": self.description,
            "requiredAttributes": {k: list(v) for k, v in self.required_attributes.items()},
            "tags": list(self.tags),
            "type": self.type.value,
        }


@dataclass(frozen=True, slots=True)
class CatalogTable:
    """
    An explore as listed in the catalog.

    Compile errors carry `errors` and no description.
    """
    name: str
    label: str = ""
    description: str | None = None
    errors: tuple[InlineError, ...] | None = None
    group_label: str | None = None
    joined_tables: tuple[JoinedTable, ...] = ()

    # Base table requirements, carried through for search index snapshots
    required_attributes: RequiredAttributes = field(default_factory=dict)

    type: CatalogType = CatalogType.TABLE

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "groupLabel": self.group_label,
            "joinedTables": [
                {"table": j.table, "sqlOn": j.sql_on, "type": j.type}
                for j in self.joined_tables
            ],
            "requiredAttributes": {k: list(v) for k, v in self.required_attributes.items()},
            "type": self.type.value,
        }
        if self.errors is not None:
            result["errors"] = [{"type": e.type, "message": e.message} for e in self.errors]
        else:
            result["description"] = self.description
        return result


CatalogItem = Union[CatalogTable, CatalogField]


@dataclass(frozen=True, slots=True)
class CatalogMetadata:
    """Detail view of a single table."""
    name: str
    model_name: str
    description: str | None = None
    source: str | None = None
    fields: tuple[CatalogField, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "modelName": self.model_name,
            "source": self.source,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass(frozen=True, slots=True)
class ChartAnalytics:
    """A chart that uses a table, as shown in catalog analytics."""
    uuid: str
    name: str
    space_uuid: str
    space_name: str
    dashboard_uuid: str | None = None
    dashboard_name: str | None = None
    chart_kind: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "name": self.name,
            "spaceUuid": self.space_uuid,
            "spaceName": self.space_name,
            "dashboardUuid": self.dashboard_uuid,
            "dashboardName": self.dashboard_name,
            "chartKind": self.chart_kind,
        }


@dataclass(frozen=True, slots=True)
class CatalogAnalytics:
    """Usage analytics for a table."""
    charts: tuple[ChartAnalytics, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"charts": [c.to_dict() for c in self.charts]}
