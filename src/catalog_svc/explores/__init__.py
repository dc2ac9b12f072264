"""Compiled explores - the schema graphs the catalog is built from."""

from .types import (
    AnyExplore,
    CompiledField,
    CompiledTable,
    DimensionType,
    Explore,
    ExploreError,
    FieldType,
    InlineError,
    JoinedTable,
    MetricType,
    RequiredAttributes,
    UserAttributeValueMap,
    get_basic_type,
    is_explore_error,
)
from .loader import ExploreLoader, load_explores

__all__ = [
    "AnyExplore",
    "CompiledField",
    "CompiledTable",
    "DimensionType",
    "Explore",
    "ExploreError",
    "FieldType",
    "InlineError",
    "JoinedTable",
    "MetricType",
    "RequiredAttributes",
    "UserAttributeValueMap",
    "get_basic_type",
    "is_explore_error",
    "ExploreLoader",
    "load_explores",
]
