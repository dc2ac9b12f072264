"""Interfaces of the stores the catalog service reads from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..charts.types import ChartSummary, Space
from ..explores.types import AnyExplore, Explore, UserAttributeValueMap
from ..permissions.ability import SpaceAccessLevel


@dataclass(frozen=True, slots=True)
class ProjectSummary:
    project_uuid: str
    organization_uuid: str
    name: str = ""


class ProjectStore(Protocol):

    async def get_summary(self, project_uuid: str) -> ProjectSummary:
        """Raises NotFoundError for unknown projects."""
        ...

    async def get_explores_from_cache(self, project_uuid: str) -> list[AnyExplore] | None:
        """Cached compiled explores, None if the project has none cached."""
        ...


class CatalogStore(Protocol):

    async def get_metadata(self, project_uuid: str, table_name: str) -> Explore:
        """Raises NotFoundError if the table does not exist."""
        ...


class UserAttributeStore(Protocol):

    async def get_attribute_values(
        self, organization_uuid: str, user_uuid: str,
    ) -> UserAttributeValueMap:
        ...


class SpaceStore(Protocol):

    async def find(self, project_uuid: str) -> list[Space]:
        ...

    async def get_user_space_access(
        self, user_uuid: str, space_uuid: str,
    ) -> SpaceAccessLevel | None:
        ...


class ChartStore(Protocol):

    async def find(self, project_uuid: str, explore_name: str) -> list[ChartSummary]:
        ...
