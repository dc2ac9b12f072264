"""Caller-scoped explore filtering."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from ..explores.types import (
    AnyExplore, CompiledField, CompiledTable, Explore, ExploreError, UserAttributeValueMap,
)
from .policy import explore_matches_required_attributes, has_user_attributes


logger = logging.getLogger(__name__)


def _visible_fields(
    fields: dict[str, CompiledField],
    user_attributes: UserAttributeValueMap,
) -> dict[str, CompiledField]:
    return {
        key: f for key, f in fields.items()
        if has_user_attributes(f.required_attributes, user_attributes)
    }


def filter_table(table: CompiledTable, user_attributes: UserAttributeValueMap) -> CompiledTable:
    """Copy of a table without the dimensions and metrics the user can't see."""
    return replace(
        table,
        dimensions=_visible_fields(table.dimensions, user_attributes),
        metrics=_visible_fields(table.metrics, user_attributes),
    )


def get_filtered_explore(explore: Explore, user_attributes: UserAttributeValueMap) -> Explore:
    """
    Build a caller-scoped copy of an explore.

    Joined tables the user has no attributes for are dropped together with
    their join. Within the remaining tables, fields the user has no
    attributes for are removed. The base table is always kept; callers check
    it with `explore_matches_required_attributes` first.
    """
    tables = {
        name: filter_table(table, user_attributes)
        for name, table in explore.tables.items()
        if name == explore.base_table
        or has_user_attributes(table.required_attributes, user_attributes)
    }
    joined_tables = tuple(j for j in explore.joined_tables if j.table in tables)
    return replace(explore, tables=tables, joined_tables=joined_tables)


def filter_explore(
    explore: AnyExplore,
    user_attributes: UserAttributeValueMap,
) -> AnyExplore | None:
    """
    Decide whether a user can see an explore, and scope it if so.

    Returns None when the explore is excluded. Explore errors are always
    returned unchanged.
    """
    if isinstance(explore, ExploreError):
        return explore
    if not explore_matches_required_attributes(explore, user_attributes):
        return None
    return get_filtered_explore(explore, user_attributes)


def filter_explores(
    explores: Iterable[AnyExplore],
    user_attributes: UserAttributeValueMap,
) -> list[AnyExplore]:
    """Filter explores for a user, keeping errors and preserving order."""
    filtered: list[AnyExplore] = []
    excluded = 0
    for explore in explores:
        scoped = filter_explore(explore, user_attributes)
        if scoped is None:
            excluded += 1
            continue
        filtered.append(scoped)
    if excluded:
        logger.debug(f"Excluded {excluded} explores by required attributes")
    return filtered
