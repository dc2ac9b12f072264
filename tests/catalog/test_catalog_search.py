"""Tests for catalog search."""

import pytest

from catalog_svc.attributes.filter import filter_explores
from catalog_svc.catalog.projector import project_fields, project_tables
from catalog_svc.catalog.search import (
    CatalogSearchGateway,
    InMemoryCatalogIndex,
    build_catalog_entries,
    merge_required_attributes,
)
from catalog_svc.catalog.types import CatalogField, CatalogTable
from catalog_svc.explores.loader import ExploreLoader
from catalog_svc.explores.types import FieldType


PROJECT = "jaffle-shop"


@pytest.fixture
def explores(explore_data) -> list:
    return ExploreLoader().load_list(explore_data)


@pytest.fixture
def index(explores) -> InMemoryCatalogIndex:
    index = InMemoryCatalogIndex()
    index.index_project(PROJECT, explores)
    return index


class StaticIndex:
    """Index returning fixed entries, whatever the query."""

    def __init__(self, entries):
        self.entries = entries
        self.calls = []

    async def search(self, project_uuid, query):
        self.calls.append((project_uuid, query))
        return list(self.entries)


class TestMergeRequiredAttributes:
    def test_disjoint(self):
        assert merge_required_attributes({"a": ("1",)}, {}, {"b": ("2",)}) == {
            "a": ("1",), "b": ("2",),
        }

    def test_shared_attribute_keeps_common_values(self):
        assert merge_required_attributes({"a": ("1", "2")}, {"a": ("2", "3")}) == {"a": ("2",)}


class TestBuildCatalogEntries:
    def test_explore_errors_not_indexed(self, explores):
        entries = build_catalog_entries(explores)
        assert "payments" not in {e.name for e in entries}

    def test_field_entries_carry_base_table_requirements(self, explores):
        entries = build_catalog_entries(explores)
        email = next(e for e in entries if e.name == "email")
        assert email.required_attributes == {"region": ("eu",), "pii": ("true",)}

    def test_table_entries_carry_base_table_requirements(self, explores):
        entries = build_catalog_entries(explores)
        orders = next(e for e in entries if isinstance(e, CatalogTable) and e.name == "orders")
        assert orders.required_attributes == {"region": ("eu",)}


class TestInMemoryCatalogIndex:
    @pytest.mark.asyncio
    async def test_name_matches_rank_first(self, index):
        results = await index.search(PROJECT, "revenue")
        # Both match by name, so index order is kept
        assert [r.name for r in results] == ["total_revenue", "revenue"]

    @pytest.mark.asyncio
    async def test_description_match(self, index):
        results = await index.search(PROJECT, "registered")
        assert [r.name for r in results] == ["users"]

    @pytest.mark.asyncio
    async def test_case_insensitive(self, index):
        results = await index.search(PROJECT, "ORDERS")
        assert results[0].name == "orders"

    @pytest.mark.asyncio
    async def test_blank_query(self, index):
        assert await index.search(PROJECT, "   ") == []

    @pytest.mark.asyncio
    async def test_unknown_project(self, index):
        assert await index.search("other", "orders") == []

    @pytest.mark.asyncio
    async def test_max_results(self, explores):
        index = InMemoryCatalogIndex(max_results=2)
        index.index_project(PROJECT, explores)
        results = await index.search(PROJECT, "r")
        assert len(results) == 2


class TestCatalogSearchGateway:
    @pytest.mark.asyncio
    async def test_drops_entries_without_attributes(self):
        entries = [
            CatalogField(name="revenue", label="Revenue", field_type=FieldType.METRIC,
                         basic_type="number", table_name="users"),
            CatalogField(name="ssn", label="SSN", field_type=FieldType.DIMENSION,
                         basic_type="string", table_name="users",
                         required_attributes={"pii": ("true",)}),
            CatalogTable(name="orders", required_attributes={"region": ("eu",)}),
        ]
        index = StaticIndex(entries)
        gateway = CatalogSearchGateway(index=index)

        results = await gateway.search(PROJECT, "anything", {"pii": ["false"]})
        assert [r.name for r in results] == ["revenue"]
        assert index.calls == [(PROJECT, "anything")]

    @pytest.mark.asyncio
    async def test_preserves_index_order(self):
        entries = [
            CatalogTable(name="b"),
            CatalogTable(name="a"),
            CatalogTable(name="c"),
        ]
        gateway = CatalogSearchGateway(index=StaticIndex(entries))
        results = await gateway.search(PROJECT, "x", {})
        assert [r.name for r in results] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_results_subset_of_listing(self, explores, index):
        held = {"region": ["us"], "pii": ["false"]}
        gateway = CatalogSearchGateway(index=index)
        scoped = filter_explores(explores, held)
        listed = (
            {("table", t.name) for t in project_tables(scoped, held)}
            | {("field", f.table_name, f.name) for f in project_fields(scoped, held)}
        )

        for query in ("orders", "revenue", "user", "s"):
            for r in await gateway.search(PROJECT, query, held):
                if isinstance(r, CatalogTable):
                    assert ("table", r.name) in listed
                    assert r.errors is None
                else:
                    assert ("field", r.table_name, r.name) in listed
