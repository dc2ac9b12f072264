"""Stores the catalog service reads from, and in-memory implementations."""

from .protocols import (
    CatalogStore,
    ChartStore,
    ProjectStore,
    ProjectSummary,
    SpaceStore,
    UserAttributeStore,
)
from .memory import (
    InMemoryCatalogStore,
    InMemoryChartStore,
    InMemoryProjectStore,
    InMemorySpaceStore,
    InMemoryUserAttributeStore,
)
from .workspace import Workspace, WorkspaceLoader, load_workspace

__all__ = [
    "CatalogStore",
    "ChartStore",
    "ProjectStore",
    "ProjectSummary",
    "SpaceStore",
    "UserAttributeStore",
    "InMemoryCatalogStore",
    "InMemoryChartStore",
    "InMemoryProjectStore",
    "InMemorySpaceStore",
    "InMemoryUserAttributeStore",
    "Workspace",
    "WorkspaceLoader",
    "load_workspace",
]
