"""Saved charts and space access."""

from .types import ChartSummary, Space
from .access import SpaceAccessLookup, filter_charts_with_access

__all__ = [
    "ChartSummary",
    "Space",
    "SpaceAccessLookup",
    "filter_charts_with_access",
]
