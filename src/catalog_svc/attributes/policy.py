"""Required attribute checks for tables, fields and catalog entries."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..explores.types import AnyExplore, ExploreError, UserAttributeValueMap


def has_user_attribute(
    user_attributes: UserAttributeValueMap,
    attribute_name: str,
    value: str,
) -> bool:
    """Check if the user holds `value` for `attribute_name`."""
    return value in user_attributes.get(attribute_name, ())


def has_user_attributes(
    required_attributes: Mapping[str, Sequence[str]] | None,
    user_attributes: UserAttributeValueMap,
) -> bool:
    """
    Check a set of required attributes against the values a user holds.

    Every required attribute must be held, with at least one value in
    common with the allowed values. No requirements means no restriction.
    """
    if not required_attributes:
        return True
    return all(
        any(has_user_attribute(user_attributes, name, v) for v in allowed)
        for name, allowed in required_attributes.items()
    )


def explore_matches_required_attributes(
    explore: AnyExplore,
    user_attributes: UserAttributeValueMap,
) -> bool:
    """
    Check if the user can see an explore at all.

    An explore is gated by its base table's required attributes. Compile
    errors are never gated.
    """
    if isinstance(explore, ExploreError):
        return True
    base_table = explore.tables[explore.base_table]
    return has_user_attributes(base_table.required_attributes, user_attributes)
