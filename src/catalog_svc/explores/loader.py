"""Explore loader - builds compiled explores from YAML/JSON definitions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .types import (
    AnyExplore, CompiledField, CompiledTable, DimensionType, Explore, ExploreError,
    FieldType, InlineError, JoinedTable, MetricType, RequiredAttributes,
)


logger = logging.getLogger(__name__)


def parse_required_attributes(data: dict[str, Any] | None) -> RequiredAttributes:
    """
    Normalise a required attributes mapping.

    Values may be a single scalar or a list; both become a tuple of strings.
    """
    if not data:
        return {}
    result: RequiredAttributes = {}
    for name, values in data.items():
        if isinstance(values, (list, tuple, set)):
            result[str(name)] = tuple(_attribute_value(v) for v in values)
        else:
            result[str(name)] = (_attribute_value(values),)
    return result


def _attribute_value(value: Any) -> str:
    # YAML turns `true` into a bool; attribute values are always compared as strings
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ExploreLoader:
    """
    Loads compiled explores from YAML or JSON files.

    File format:
    ```yaml
    - name: orders
      label: Orders
      base_table: orders
      yml_path: models/orders.yml
      joined_tables:
        - table: customers
          sql_on: ${orders.customer_id} = ${customers.id}
      tables:
        orders:
          description: All orders
          required_attributes:
            region: [eu]
          dimensions:
            status: {type: string}
          metrics:
            revenue: {type: sum}
    - name: payments
      errors:
        - missing column x
    ```
    """

    def load_file(self, path: str | Path) -> list[AnyExplore]:
        """Load explores from a YAML or JSON file."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Explore file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                import json
                data = json.load(f)

        return self.load_list(data or [])

    def load_list(self, data: list[dict[str, Any]]) -> list[AnyExplore]:
        """Load explores from a list of dictionaries, preserving order."""
        explores = [self.parse_explore(item) for item in data]
        logger.debug(f"Loaded {len(explores)} explores")
        return explores

    def parse_explore(self, data: dict[str, Any]) -> AnyExplore:
        """Parse a single explore or explore error."""
        name = data["name"]
        tables = {
            table_name: self._parse_table(table_name, table_data or {})
            for table_name, table_data in (data.get("tables") or {}).items()
        }
        joined_tables = tuple(
            JoinedTable(
                table=j["table"],
                sql_on=j.get("sql_on", ""),
                type=j.get("type", "left"),
            )
            for j in data.get("joined_tables", [])
        )

        if data.get("errors"):
            return ExploreError(
                name=name,
                label=data.get("label", name),
                errors=tuple(self._parse_error(e) for e in data["errors"]),
                group_label=data.get("group_label"),
                base_table=data.get("base_table"),
                tables=tables or None,
                joined_tables=joined_tables,
            )

        base_table = data.get("base_table", name)
        if base_table not in tables:
            raise ValueError(f"Explore '{name}' has no base table '{base_table}'")

        return Explore(
            name=name,
            label=data.get("label", name),
            base_table=base_table,
            tables=tables,
            joined_tables=joined_tables,
            group_label=data.get("group_label"),
            yml_path=data.get("yml_path"),
            tags=tuple(data.get("tags", [])),
        )

    def _parse_error(self, data: Any) -> InlineError:
        if isinstance(data, dict):
            return InlineError(
                message=data.get("message", ""),
                type=data.get("type", "COMPILE_ERROR"),
            )
        return InlineError(message=str(data))

    def _parse_table(self, name: str, data: dict[str, Any]) -> CompiledTable:
        label = data.get("label", name)
        dimensions = {
            field_name: self._parse_field(
                field_name, field_data or {}, FieldType.DIMENSION, name, label,
            )
            for field_name, field_data in (data.get("dimensions") or {}).items()
        }
        metrics = {
            field_name: self._parse_field(
                field_name, field_data or {}, FieldType.METRIC, name, label,
            )
            for field_name, field_data in (data.get("metrics") or {}).items()
        }
        return CompiledTable(
            name=name,
            label=label,
            description=data.get("description"),
            dimensions=dimensions,
            metrics=metrics,
            required_attributes=parse_required_attributes(data.get("required_attributes")),
            group_label=data.get("group_label"),
        )

    def _parse_field(
        self,
        name: str,
        data: dict[str, Any],
        field_type: FieldType,
        table_name: str,
        table_label: str,
    ) -> CompiledField:
        type_str = str(data.get("type", "")).lower()
        field_kind: DimensionType | MetricType
        if field_type == FieldType.DIMENSION:
            try:
                field_kind = DimensionType(type_str or "string")
            except ValueError:
                logger.warning(f"Unknown dimension type '{type_str}' for {table_name}.{name}")
                field_kind = DimensionType.STRING
        else:
            try:
                field_kind = MetricType(type_str or "number")
            except ValueError:
                logger.warning(f"Unknown metric type '{type_str}' for {table_name}.{name}")
                field_kind = MetricType.NUMBER

        return CompiledField(
            name=name,
            field_type=field_type,
            type=field_kind,
            table=table_name,
            label=data.get("label", name),
            table_label=table_label,
            description=data.get("description"),
            hidden=bool(data.get("hidden", False)),
            required_attributes=parse_required_attributes(data.get("required_attributes")),
            tags=tuple(data.get("tags", [])),
        )


def load_explores(path: str | Path) -> list[AnyExplore]:
    """Convenience function to load explores from a file."""
    return ExploreLoader().load_file(path)
