"""Catalog service - access-filtered views of a project's explores.

Every operation runs the same entry sequence:
1. Resolve the project's organization
2. Check the caller can view the project (ForbiddenError otherwise)
3. Look up the caller's user attribute values

Then, for listings, the cached explores are scoped to the caller
(`attributes.filter`) and projected (`catalog.projector`), or the query is
handed to the search index (`catalog.search`). Elements the caller lacks
attributes for are left out silently; only single-table metadata fails
hard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .attributes.filter import filter_explores
from .catalog.projector import project_fields, project_metadata, project_tables
from .catalog.search import CatalogSearchGateway
from .catalog.types import (
    CatalogAnalytics, CatalogItem, CatalogMetadata, CatalogType, ChartAnalytics,
)
from .charts.access import filter_charts_with_access
from .errors import ForbiddenError
from .explores.types import UserAttributeValueMap
from .identity.types import CallerIdentity
from .permissions.ability import Ability, Action, ProjectResource, cannot
from .stores.protocols import (
    CatalogStore, ChartStore, ProjectStore, ProjectSummary, SpaceStore, UserAttributeStore,
)
from .stores.workspace import Workspace


logger = logging.getLogger(__name__)


@dataclass
class CatalogService:
    """
    Catalog service.

    The caller's ability is passed into each operation rather than read
    off the caller, so the permission backend stays pluggable.
    """
    project_store: ProjectStore
    catalog_store: CatalogStore
    user_attribute_store: UserAttributeStore
    space_store: SpaceStore
    chart_store: ChartStore
    search_gateway: CatalogSearchGateway

    @classmethod
    def from_workspace(cls, workspace: Workspace) -> CatalogService:
        return cls(
            project_store=workspace.projects,
            catalog_store=workspace.catalog,
            user_attribute_store=workspace.user_attributes,
            space_store=workspace.spaces,
            chart_store=workspace.charts,
            search_gateway=CatalogSearchGateway(index=workspace.search_index),
        )

    async def _authorize_project(
        self,
        caller: CallerIdentity,
        ability: Ability,
        project_uuid: str,
    ) -> ProjectSummary:
        summary = await self.project_store.get_summary(project_uuid)
        resource = ProjectResource(
            organization_uuid=summary.organization_uuid,
            project_uuid=project_uuid,
        )
        if cannot(ability, Action.VIEW, resource):
            logger.info(f"{caller} denied view on project {project_uuid}")
            raise ForbiddenError()
        return summary

    async def _get_user_attributes(
        self,
        summary: ProjectSummary,
        caller: CallerIdentity,
    ) -> UserAttributeValueMap:
        return await self.user_attribute_store.get_attribute_values(
            summary.organization_uuid,
            caller.user_uuid or "",
        )

    async def get_catalog(
        self,
        caller: CallerIdentity,
        ability: Ability,
        project_uuid: str,
        search: str | None = None,
        type: CatalogType | None = None,
    ) -> list[CatalogItem]:
        """
        List the catalog of a project.

        - With `search`: matching index entries the caller has attributes for.
          Explore errors are not indexed, so they never appear.
        - With `type=field`: every visible field.
        - Otherwise: every visible table, explore errors included.
        """
        summary = await self._authorize_project(caller, ability, project_uuid)

        explores = await self.project_store.get_explores_from_cache(project_uuid)
        if not explores:
            return []

        user_attributes = await self._get_user_attributes(summary, caller)

        if search:
            return await self.search_gateway.search(project_uuid, search, user_attributes)

        filtered_explores = filter_explores(explores, user_attributes)

        if type == CatalogType.FIELD:
            return project_fields(filtered_explores, user_attributes)

        return project_tables(filtered_explores, user_attributes)

    async def get_metadata(
        self,
        caller: CallerIdentity,
        ability: Ability,
        project_uuid: str,
        table_name: str,
    ) -> CatalogMetadata:
        """
        Metadata for a single table.

        Raises:
            ForbiddenError: If the caller can't view the project, or lacks
                the attributes the table requires.
            NotFoundError: If the project or table doesn't exist.
        """
        summary = await self._authorize_project(caller, ability, project_uuid)
        explore = await self.catalog_store.get_metadata(project_uuid, table_name)
        user_attributes = await self._get_user_attributes(summary, caller)

        try:
            return project_metadata(explore, user_attributes)
        except ForbiddenError:
            logger.info(f"{caller} lacks attributes for explore {explore.name}")
            raise

    async def get_analytics(
        self,
        caller: CallerIdentity,
        ability: Ability,
        project_uuid: str,
        table_name: str,
    ) -> CatalogAnalytics:
        """Charts built on a table, limited to spaces the caller can view."""
        # Chart visibility depends on space access only, so no attribute lookup
        await self._authorize_project(caller, ability, project_uuid)

        chart_summaries = await self.chart_store.find(project_uuid, table_name)
        spaces = await self.space_store.find(project_uuid)
        charts_with_access = await filter_charts_with_access(
            chart_summaries,
            spaces,
            self.space_store.get_user_space_access,
            ability,
            project_uuid,
            caller.user_uuid or "",
        )

        return CatalogAnalytics(charts=tuple(
            ChartAnalytics(
                uuid=chart.uuid,
                name=chart.name,
                space_uuid=chart.space_uuid,
                space_name=chart.space_name,
                dashboard_uuid=chart.dashboard_uuid,
                dashboard_name=chart.dashboard_name,
                chart_kind=chart.chart_kind,
            )
            for chart in charts_with_access
        ))
