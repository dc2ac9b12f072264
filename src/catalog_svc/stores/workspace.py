"""Workspace - the set of in-memory stores, loadable from YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..cache.memory import ExploreCache
from ..catalog.search import InMemoryCatalogIndex
from ..charts.types import ChartSummary, Space
from ..explores.loader import ExploreLoader, parse_required_attributes
from ..permissions.ability import SpaceAccessLevel
from .memory import (
    InMemoryCatalogStore, InMemoryChartStore, InMemoryProjectStore,
    InMemorySpaceStore, InMemoryUserAttributeStore,
)
from .protocols import ProjectSummary


logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """Every store the catalog service reads from."""
    projects: InMemoryProjectStore = field(default_factory=InMemoryProjectStore)
    catalog: InMemoryCatalogStore = field(default_factory=InMemoryCatalogStore)
    user_attributes: InMemoryUserAttributeStore = field(default_factory=InMemoryUserAttributeStore)
    spaces: InMemorySpaceStore = field(default_factory=InMemorySpaceStore)
    charts: InMemoryChartStore = field(default_factory=InMemoryChartStore)
    search_index: InMemoryCatalogIndex = field(default_factory=InMemoryCatalogIndex)

    @classmethod
    def create(
        cls,
        cache_ttl_seconds: float | None = None,
        max_search_results: int = 50,
    ) -> Workspace:
        return cls(
            projects=InMemoryProjectStore(cache=ExploreCache(default_ttl_seconds=cache_ttl_seconds)),
            search_index=InMemoryCatalogIndex(max_results=max_search_results),
        )


class WorkspaceLoader:
    """
    Loads projects, explores, spaces, charts and user attributes into a
    workspace.

    File format:
    ```yaml
    projects:
      - uuid: jaffle-shop
        organization_uuid: acme
        name: Jaffle Shop
        explores_file: explores.yaml   # or an inline `explores:` list
        spaces:
          - uuid: shared
            name: Shared
            is_private: false
            access:
              user-1: viewer
        charts:
          - uuid: chart-1
            name: Weekly revenue
            space_uuid: shared
            explore_name: orders
            chart_kind: line
    user_attributes:
      acme:
        user-1:
          region: [eu]
    ```
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace
        self._explore_loader = ExploreLoader()

    async def load_file(self, path: str | Path) -> Workspace:
        """Load a workspace from a YAML file."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Workspace file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return await self.load_dict(data or {}, base_path=path.parent)

    async def load_dict(self, data: dict[str, Any], base_path: Path | None = None) -> Workspace:
        """Load a workspace from a dictionary."""
        for project_data in data.get("projects", []):
            await self._load_project(project_data, base_path)

        for organization_uuid, users in (data.get("user_attributes") or {}).items():
            for user_uuid, values in (users or {}).items():
                self.workspace.user_attributes.set_attribute_values(
                    organization_uuid,
                    user_uuid,
                    {k: list(v) for k, v in parse_required_attributes(values).items()},
                )

        logger.info(f"Loaded workspace with {len(data.get('projects', []))} projects")
        return self.workspace

    async def _load_project(self, data: dict[str, Any], base_path: Path | None) -> None:
        summary = ProjectSummary(
            project_uuid=data["uuid"],
            organization_uuid=data["organization_uuid"],
            name=data.get("name", ""),
        )
        self.workspace.projects.register(summary)

        if "explores_file" in data:
            explores_path = Path(data["explores_file"])
            if base_path is not None and not explores_path.is_absolute():
                explores_path = base_path / explores_path
            explores = self._explore_loader.load_file(explores_path)
        elif "explores" in data:
            explores = self._explore_loader.load_list(data["explores"] or [])
        else:
            # Project never compiled: nothing cached
            explores = None

        if explores is not None:
            await self.workspace.projects.set_explores(summary.project_uuid, explores)
            self.workspace.catalog.register_explores(summary.project_uuid, explores)
            self.workspace.search_index.index_project(summary.project_uuid, explores)

        spaces: dict[str, Space] = {}
        for space_data in data.get("spaces", []):
            space = Space(
                uuid=space_data["uuid"],
                name=space_data.get("name", space_data["uuid"]),
                organization_uuid=summary.organization_uuid,
                project_uuid=summary.project_uuid,
                is_private=bool(space_data.get("is_private", False)),
            )
            spaces[space.uuid] = space
            self.workspace.spaces.register(space)
            for user_uuid, level in (space_data.get("access") or {}).items():
                self.workspace.spaces.grant(user_uuid, space.uuid, SpaceAccessLevel(level))

        for chart_data in data.get("charts", []):
            space = spaces.get(chart_data["space_uuid"])
            self.workspace.charts.register(summary.project_uuid, ChartSummary(
                uuid=chart_data["uuid"],
                name=chart_data["name"],
                space_uuid=chart_data["space_uuid"],
                space_name=chart_data.get("space_name") or (space.name if space else ""),
                explore_name=chart_data["explore_name"],
                description=chart_data.get("description"),
                dashboard_uuid=chart_data.get("dashboard_uuid"),
                dashboard_name=chart_data.get("dashboard_name"),
                chart_kind=chart_data.get("chart_kind"),
            ))

        logger.debug(f"Loaded project {summary.project_uuid}")


async def load_workspace(path: str | Path, workspace: Workspace | None = None) -> Workspace:
    """Convenience function to load a workspace from a file."""
    return await WorkspaceLoader(workspace or Workspace()).load_file(path)
