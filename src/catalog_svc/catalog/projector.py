"""Catalog projections over filtered explores.

Input is the caller-scoped explore list produced by
`attributes.filter.filter_explores`. Each projection re-checks base table
attributes and never re-orders: explore order, then table order, then
field order.
"""

from __future__ import annotations

from typing import Iterable

from ..attributes.policy import explore_matches_required_attributes, has_user_attributes
from ..errors import ForbiddenError
from ..explores.types import (
    AnyExplore, CompiledTable, Explore, ExploreError, UserAttributeValueMap, get_basic_type,
)
from .types import CatalogField, CatalogMetadata, CatalogTable


def parse_fields_from_compiled_table(table: CompiledTable) -> list[CatalogField]:
    """Catalog fields for a table: dimensions then metrics, hidden fields skipped."""
    return [
        CatalogField(
            name=f.name,
            label=f.label or f.name,
            field_type=f.field_type,
            basic_type=get_basic_type(f),
            table_name=table.name,
            table_label=f.table_label or table.label,
            description=f.description,
            required_attributes=f.required_attributes,
            tags=f.tags,
        )
        for f in table.fields
        if not f.hidden
    ]


def project_fields(
    explores: Iterable[AnyExplore],
    user_attributes: UserAttributeValueMap,
) -> list[CatalogField]:
    """Flatten every visible explore into its catalog fields."""
    fields: list[CatalogField] = []
    for explore in explores:
        if isinstance(explore, ExploreError):
            continue
        if not explore_matches_required_attributes(explore, user_attributes):
            continue
        for table in explore.tables.values():
            fields.extend(parse_fields_from_compiled_table(table))
    return fields


def _error_to_catalog_table(explore: ExploreError) -> CatalogTable:
    return CatalogTable(
        name=explore.name,
        label=explore.label,
        errors=explore.errors,
        group_label=explore.group_label,
        joined_tables=explore.joined_tables,
    )


def _explore_to_catalog_table(explore: Explore) -> CatalogTable:
    base_table = explore.tables[explore.base_table]
    return CatalogTable(
        name=explore.name,
        label=explore.label,
        description=base_table.description,
        group_label=explore.group_label,
        joined_tables=explore.joined_tables,
        required_attributes=base_table.required_attributes,
    )


def project_tables(
    explores: Iterable[AnyExplore],
    user_attributes: UserAttributeValueMap,
) -> list[CatalogTable]:
    """One catalog table per visible explore, errors included."""
    tables: list[CatalogTable] = []
    for explore in explores:
        if isinstance(explore, ExploreError):
            tables.append(_error_to_catalog_table(explore))
        elif explore_matches_required_attributes(explore, user_attributes):
            tables.append(_explore_to_catalog_table(explore))
    return tables


def project_metadata(explore: Explore, user_attributes: UserAttributeValueMap) -> CatalogMetadata:
    """
    Metadata for the base table of a single explore.

    Raises:
        ForbiddenError: If the user can't see the explore.
    """
    if not explore_matches_required_attributes(explore, user_attributes):
        raise ForbiddenError(f"You don't have access to the explore {explore.name}")

    base_table = explore.tables[explore.base_table]
    fields = tuple(
        f for f in parse_fields_from_compiled_table(base_table)
        if has_user_attributes(f.required_attributes, user_attributes)
    )
    return CatalogMetadata(
        name=explore.label,
        description=base_table.description,
        model_name=explore.name,
        source=explore.yml_path,
        fields=fields,
    )
