"""Tests for caller-scoped explore filtering."""

import pytest

from catalog_svc.attributes.filter import filter_explore, filter_explores, get_filtered_explore
from catalog_svc.explores.loader import ExploreLoader
from catalog_svc.explores.types import Explore, ExploreError


@pytest.fixture
def explores(explore_data) -> list:
    return ExploreLoader().load_list(explore_data)


@pytest.fixture
def orders(explores) -> Explore:
    return explores[0]


@pytest.fixture
def users(explores) -> Explore:
    return explores[1]


class TestFilterExplore:
    def test_explore_error_unchanged(self, explores):
        error = explores[2]
        assert isinstance(error, ExploreError)
        assert filter_explore(error, {}) is error

    def test_non_matching_explore_excluded(self, orders):
        assert filter_explore(orders, {"region": ["us"]}) is None

    def test_fields_without_attributes_removed(self, users):
        scoped = filter_explore(users, {"pii": ["false"]})
        assert list(scoped.tables["users"].dimensions) == []
        assert list(scoped.tables["users"].metrics) == ["revenue"]

    def test_fields_with_attributes_kept(self, users):
        scoped = filter_explore(users, {"pii": ["true"]})
        assert list(scoped.tables["users"].dimensions) == ["ssn"]

    def test_input_not_mutated(self, users):
        filter_explore(users, {})
        assert "ssn" in users.tables["users"].dimensions

    def test_joins_and_metadata_kept(self, orders):
        scoped = filter_explore(orders, {"region": ["eu"]})
        assert [j.table for j in scoped.joined_tables] == ["customers"]
        assert scoped.tables["orders"].description == "All orders"
        assert scoped.yml_path == "models/orders.yml"
        assert list(scoped.tables["customers"].dimensions) == ["customer_id"]


class TestGetFilteredExplore:
    def test_joined_table_without_attributes_dropped(self):
        explore = ExploreLoader().parse_explore({
            "name": "orders",
            "joined_tables": [{"table": "customers"}, {"table": "stores"}],
            "tables": {
                "orders": {"dimensions": {"id": {}}},
                "customers": {
                    "required_attributes": {"pii": ["true"]},
                    "dimensions": {"email": {}},
                },
                "stores": {"dimensions": {"city": {}}},
            },
        })
        scoped = get_filtered_explore(explore, {})
        assert list(scoped.tables) == ["orders", "stores"]
        assert [j.table for j in scoped.joined_tables] == ["stores"]

        scoped = get_filtered_explore(explore, {"pii": ["true"]})
        assert list(scoped.tables) == ["orders", "customers", "stores"]


class TestFilterExplores:
    def test_keeps_errors_and_order(self, explores):
        filtered = filter_explores(explores, {"region": ["us"]})
        assert [e.name for e in filtered] == ["users", "payments"]

    def test_all_visible(self, explores):
        filtered = filter_explores(explores, {"region": ["eu"]})
        assert [e.name for e in filtered] == ["orders", "users", "payments"]
