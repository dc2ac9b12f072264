"""Compiled explore types - tables, fields, joins and compile errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


# Attribute name -> allowed values. Empty mapping means "no restriction".
RequiredAttributes = dict[str, tuple[str, ...]]

# Attribute name -> values held by a user within an organization.
UserAttributeValueMap = dict[str, list[str]]


class FieldType(str, Enum):
    """Kind of compiled field."""
    DIMENSION = "dimension"
    METRIC = "metric"


class DimensionType(str, Enum):
    """Supported dimension types."""
    STRING = "string"
    NUMBER = "number"
    TIMESTAMP = "timestamp"
    DATE = "date"
    BOOLEAN = "boolean"


class MetricType(str, Enum):
    """Supported metric (measure) types."""
    COUNT = "count"
    COUNT_DISTINCT = "count_distinct"
    SUM = "sum"
    AVERAGE = "average"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"
    PERCENTILE = "percentile"
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"


@dataclass(frozen=True, slots=True)
class CompiledField:
    """A dimension or metric compiled from the data model."""
    name: str
    field_type: FieldType
    type: DimensionType | MetricType
    table: str
    label: str = ""
    table_label: str = ""
    description: str | None = None
    hidden: bool = False

    # Attributes the caller must hold to see this field
    required_attributes: RequiredAttributes = field(default_factory=dict)

    tags: tuple[str, ...] = ()

    @property
    def is_dimension(self) -> bool:
        return self.field_type == FieldType.DIMENSION


@dataclass(frozen=True, slots=True)
class CompiledTable:
    """One table inside an explore, with its dimensions and metrics."""
    name: str
    label: str = ""
    description: str | None = None
    dimensions: dict[str, CompiledField] = field(default_factory=dict)
    metrics: dict[str, CompiledField] = field(default_factory=dict)

    # Attributes the caller must hold to see this table at all
    required_attributes: RequiredAttributes = field(default_factory=dict)

    group_label: str | None = None

    @property
    def fields(self) -> Iterator[CompiledField]:
        """Dimensions then metrics, in declared order."""
        yield from self.dimensions.values()
        yield from self.metrics.values()


@dataclass(frozen=True, slots=True)
class JoinedTable:
    """Join descriptor from the base table to another table."""
    table: str
    sql_on: str = ""
    type: str = "left"


@dataclass(frozen=True, slots=True)
class InlineError:
    """A structural compile error reported for an explore."""
    message: str
    type: str = "COMPILE_ERROR"


@dataclass(frozen=True, slots=True)
class Explore:
    """
    A compiled schema graph for one logical table and its joins.

    `tables[base_table]` always exists for a valid explore.
    """
    name: str
    base_table: str
    tables: dict[str, CompiledTable]
    label: str = ""
    joined_tables: tuple[JoinedTable, ...] = ()
    group_label: str | None = None
    yml_path: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def base(self) -> CompiledTable:
        return self.tables[self.base_table]


@dataclass(frozen=True, slots=True)
class ExploreError:
    """
    An explore that failed to compile.

    Never carries resolvable fields. `base_table` and `tables` may be missing
    or only partially populated.
    """
    name: str
    errors: tuple[InlineError, ...]
    label: str = ""
    group_label: str | None = None
    base_table: str | None = None
    tables: dict[str, CompiledTable] | None = None
    joined_tables: tuple[JoinedTable, ...] = ()


AnyExplore = Union[Explore, ExploreError]


def is_explore_error(explore: AnyExplore) -> bool:
    """Check if an explore is a compile error."""
    return isinstance(explore, ExploreError)


_NUMERIC_METRICS = frozenset({
    MetricType.COUNT,
    MetricType.COUNT_DISTINCT,
    MetricType.SUM,
    MetricType.AVERAGE,
    MetricType.MIN,
    MetricType.MAX,
    MetricType.MEDIAN,
    MetricType.PERCENTILE,
    MetricType.NUMBER,
})


def get_basic_type(compiled_field: CompiledField) -> str:
    """
    Reduce a field type to one of: string, number, date, timestamp, boolean.
    """
    if compiled_field.field_type == FieldType.METRIC and compiled_field.type in _NUMERIC_METRICS:
        return "number"
    return compiled_field.type.value
