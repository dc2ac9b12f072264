"""User attribute policies - who can see which tables and fields."""

from .policy import (
    explore_matches_required_attributes,
    has_user_attribute,
    has_user_attributes,
)
from .filter import filter_explore, filter_explores, filter_table, get_filtered_explore

__all__ = [
    "explore_matches_required_attributes",
    "has_user_attribute",
    "has_user_attributes",
    "filter_explore",
    "filter_explores",
    "filter_table",
    "get_filtered_explore",
]
