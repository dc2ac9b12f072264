"""Catalog projections and search."""

from .types import (
    CatalogAnalytics,
    CatalogField,
    CatalogItem,
    CatalogMetadata,
    CatalogTable,
    CatalogType,
    ChartAnalytics,
)
from .projector import (
    parse_fields_from_compiled_table,
    project_fields,
    project_metadata,
    project_tables,
)
from .search import CatalogSearchGateway, CatalogSearchIndex, InMemoryCatalogIndex

__all__ = [
    "CatalogAnalytics",
    "CatalogField",
    "CatalogItem",
    "CatalogMetadata",
    "CatalogTable",
    "CatalogType",
    "ChartAnalytics",
    "parse_fields_from_compiled_table",
    "project_fields",
    "project_metadata",
    "project_tables",
    "CatalogSearchGateway",
    "CatalogSearchIndex",
    "InMemoryCatalogIndex",
]
