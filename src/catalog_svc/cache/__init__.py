"""Caching layer for compiled explores."""

from .memory import CacheEntry, ExploreCache

__all__ = [
    "CacheEntry",
    "ExploreCache",
]
