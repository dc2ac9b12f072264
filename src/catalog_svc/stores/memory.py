"""In-memory store implementations."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..cache.memory import ExploreCache
from ..charts.types import ChartSummary, Space
from ..errors import NotFoundError
from ..explores.types import AnyExplore, Explore, UserAttributeValueMap
from ..permissions.ability import SpaceAccessLevel
from .protocols import ProjectSummary


@dataclass
class InMemoryProjectStore:
    """
    Projects and their compiled explores, served through an `ExploreCache`.

    The last snapshot set for each project is kept, and is put back in the
    cache when its entry has expired.
    """
    cache: ExploreCache = field(default_factory=ExploreCache)

    _projects: dict[str, ProjectSummary] = field(default_factory=dict, init=False)
    _snapshots: dict[str, tuple[AnyExplore, ...]] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def register(self, summary: ProjectSummary) -> None:
        with self._lock:
            self._projects[summary.project_uuid] = summary

    async def set_explores(self, project_uuid: str, explores: list[AnyExplore]) -> None:
        with self._lock:
            self._snapshots[project_uuid] = tuple(explores)
        await self.cache.set(project_uuid, explores)

    async def get_summary(self, project_uuid: str) -> ProjectSummary:
        with self._lock:
            summary = self._projects.get(project_uuid)
        if summary is None:
            raise NotFoundError(f"Project not found: {project_uuid}")
        return summary

    async def get_explores_from_cache(self, project_uuid: str) -> list[AnyExplore] | None:
        explores = self.cache.get(project_uuid)
        if explores is not None:
            return explores

        with self._lock:
            snapshot = self._snapshots.get(project_uuid)
        if snapshot is None:
            return None

        await self.cache.set(project_uuid, list(snapshot))
        return list(snapshot)


@dataclass
class InMemoryCatalogStore:
    """Compiled explores by table name, for single-table lookups."""
    _explores: dict[str, dict[str, Explore]] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def register_explores(self, project_uuid: str, explores: list[AnyExplore]) -> None:
        """Replace a project's explores. Explore errors are not stored."""
        by_name = {e.name: e for e in explores if isinstance(e, Explore)}
        with self._lock:
            self._explores[project_uuid] = by_name

    async def get_metadata(self, project_uuid: str, table_name: str) -> Explore:
        with self._lock:
            explore = self._explores.get(project_uuid, {}).get(table_name)
        if explore is None:
            raise NotFoundError(f"Table not found: {table_name}")
        return explore


@dataclass
class InMemoryUserAttributeStore:
    """User attribute values per organization member."""
    _values: dict[tuple[str, str], UserAttributeValueMap] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def set_attribute_values(
        self,
        organization_uuid: str,
        user_uuid: str,
        values: UserAttributeValueMap,
    ) -> None:
        with self._lock:
            self._values[(organization_uuid, user_uuid)] = {
                name: list(v) for name, v in values.items()
            }

    async def get_attribute_values(
        self, organization_uuid: str, user_uuid: str,
    ) -> UserAttributeValueMap:
        with self._lock:
            values = self._values.get((organization_uuid, user_uuid), {})
            return {name: list(v) for name, v in values.items()}


@dataclass
class InMemorySpaceStore:
    """Spaces and the direct access users have on them."""
    _spaces: dict[str, Space] = field(default_factory=dict, init=False)
    _access: dict[tuple[str, str], SpaceAccessLevel] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def register(self, space: Space) -> None:
        with self._lock:
            self._spaces[space.uuid] = space

    def grant(self, user_uuid: str, space_uuid: str, access: SpaceAccessLevel) -> None:
        with self._lock:
            self._access[(user_uuid, space_uuid)] = access

    async def find(self, project_uuid: str) -> list[Space]:
        with self._lock:
            return [s for s in self._spaces.values() if s.project_uuid == project_uuid]

    async def get_user_space_access(
        self, user_uuid: str, space_uuid: str,
    ) -> SpaceAccessLevel | None:
        with self._lock:
            return self._access.get((user_uuid, space_uuid))


@dataclass
class InMemoryChartStore:
    """Saved chart summaries per project, in registration order."""
    _charts: dict[str, list[ChartSummary]] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def register(self, project_uuid: str, chart: ChartSummary) -> None:
        with self._lock:
            self._charts.setdefault(project_uuid, []).append(chart)

    async def find(self, project_uuid: str, explore_name: str) -> list[ChartSummary]:
        with self._lock:
            return [
                c for c in self._charts.get(project_uuid, [])
                if c.explore_name == explore_name
            ]
