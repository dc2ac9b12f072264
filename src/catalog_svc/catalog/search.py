"""Catalog search - index lookups re-checked against user attributes."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from ..attributes.policy import has_user_attributes
from ..explores.types import AnyExplore, Explore, RequiredAttributes, UserAttributeValueMap
from .projector import parse_fields_from_compiled_table
from .types import CatalogField, CatalogItem, CatalogTable


logger = logging.getLogger(__name__)


class CatalogSearchIndex(Protocol):
    """Full-text index of catalog entries for a project."""

    async def search(self, project_uuid: str, query: str) -> list[CatalogItem]:
        """Entries matching `query`, most relevant first."""
        ...


@dataclass
class CatalogSearchGateway:
    """
    Runs catalog searches against an index and drops entries the user
    lacks attributes for.

    Index entries carry the required attributes captured at index time,
    which may differ from the live explores. Errored explores are never
    indexed, so they never show up here.
    """
    index: CatalogSearchIndex

    async def search(
        self,
        project_uuid: str,
        query: str,
        user_attributes: UserAttributeValueMap,
    ) -> list[CatalogItem]:
        catalog = await self.index.search(project_uuid, query)
        results = [
            item for item in catalog
            if has_user_attributes(item.required_attributes, user_attributes)
        ]
        logger.debug(
            f"Catalog search '{query}' in {project_uuid}: "
            f"{len(results)}/{len(catalog)} entries visible"
        )
        return results


def merge_required_attributes(*requirements: RequiredAttributes) -> RequiredAttributes:
    """
    Combine requirements that all have to hold.

    Attributes required at several levels keep only the values allowed at
    every level.
    """
    merged: RequiredAttributes = {}
    for required in requirements:
        for name, allowed in required.items():
            if name in merged:
                merged[name] = tuple(v for v in merged[name] if v in allowed)
            else:
                merged[name] = tuple(allowed)
    return merged


def build_catalog_entries(explores: Iterable[AnyExplore]) -> list[CatalogItem]:
    """
    Snapshot the searchable entries of a project.

    Each table entry carries its base table requirements. Each field entry
    carries the requirements of the explore's base table, its own table and
    the field itself.
    """
    entries: list[CatalogItem] = []
    for explore in explores:
        if not isinstance(explore, Explore):
            continue
        base_table = explore.tables[explore.base_table]
        entries.append(CatalogTable(
            name=explore.name,
            label=explore.label,
            description=base_table.description,
            group_label=explore.group_label,
            joined_tables=explore.joined_tables,
            required_attributes=base_table.required_attributes,
        ))
        for table in explore.tables.values():
            for catalog_field in parse_fields_from_compiled_table(table):
                entries.append(CatalogField(
                    name=catalog_field.name,
                    label=catalog_field.label,
                    field_type=catalog_field.field_type,
                    basic_type=catalog_field.basic_type,
                    table_name=catalog_field.table_name,
                    table_label=catalog_field.table_label,
                    description=catalog_field.description,
                    required_attributes=merge_required_attributes(
                        base_table.required_attributes,
                        table.required_attributes,
                        catalog_field.required_attributes,
                    ),
                    tags=catalog_field.tags,
                ))
    return entries


@dataclass
class InMemoryCatalogIndex:
    """
    In-memory catalog search index.

    Matches case-insensitive substrings of name, label and description.
    Name matches rank above label matches, which rank above description
    matches; order within a rank follows index order.
    """
    max_results: int = 50

    _entries: dict[str, list[CatalogItem]] = field(default_factory=dict, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)

    def index_project(self, project_uuid: str, explores: Iterable[AnyExplore]) -> int:
        """Replace the indexed entries of a project. Returns the entry count."""
        entries = build_catalog_entries(explores)
        with self._lock:
            self._entries[project_uuid] = entries
        logger.info(f"Indexed {len(entries)} catalog entries for project {project_uuid}")
        return len(entries)

    def clear(self, project_uuid: str) -> None:
        with self._lock:
            self._entries.pop(project_uuid, None)

    async def search(self, project_uuid: str, query: str) -> list[CatalogItem]:
        query_lower = query.strip().lower()
        if not query_lower:
            return []

        with self._lock:
            entries = list(self._entries.get(project_uuid, []))

        ranked: list[tuple[int, CatalogItem]] = []
        for entry in entries:
            rank = self._rank(entry, query_lower)
            if rank:
                ranked.append((rank, entry))

        # sorted() is stable, so index order is kept within a rank
        ranked = sorted(ranked, key=lambda item: -item[0])
        return [entry for _, entry in ranked[: self.max_results]]

    @staticmethod
    def _rank(entry: CatalogItem, query_lower: str) -> int:
        if query_lower in entry.name.lower():
            return 3
        if query_lower in (entry.label or "").lower():
            return 2
        if query_lower in (entry.description or "").lower():
            return 1
        return 0
