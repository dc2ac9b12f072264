"""Tests for required attribute checks."""

import pytest

from catalog_svc.attributes.policy import (
    explore_matches_required_attributes,
    has_user_attribute,
    has_user_attributes,
)
from catalog_svc.explores.loader import ExploreLoader


class TestHasUserAttributes:
    def test_no_requirements_always_match(self):
        assert has_user_attributes({}, {})
        assert has_user_attributes(None, {"region": ["eu"]})

    def test_matching_value(self):
        assert has_user_attributes({"region": ("eu",)}, {"region": ["eu"]})

    def test_any_allowed_value_matches(self):
        assert has_user_attributes({"region": ("eu", "us")}, {"region": ["us"]})

    def test_any_held_value_matches(self):
        assert has_user_attributes({"region": ("eu",)}, {"region": ["apac", "eu"]})

    def test_missing_attribute(self):
        assert not has_user_attributes({"region": ("eu",)}, {"team": ["eu"]})

    def test_empty_intersection(self):
        assert not has_user_attributes({"region": ("eu",)}, {"region": ["us"]})

    def test_held_attribute_without_values(self):
        assert not has_user_attributes({"region": ("eu",)}, {"region": []})

    def test_every_attribute_required(self):
        required = {"region": ("eu",), "pii": ("true",)}
        assert has_user_attributes(required, {"region": ["eu"], "pii": ["true"]})
        assert not has_user_attributes(required, {"region": ["eu"], "pii": ["false"]})
        assert not has_user_attributes(required, {"region": ["eu"]})

    def test_has_user_attribute(self):
        assert has_user_attribute({"region": ["eu"]}, "region", "eu")
        assert not has_user_attribute({"region": ["eu"]}, "region", "us")
        assert not has_user_attribute({}, "region", "eu")


class TestExploreMatchesRequiredAttributes:
    @pytest.fixture
    def loader(self) -> ExploreLoader:
        return ExploreLoader()

    def test_base_table_requirements(self, loader):
        explore = loader.parse_explore({
            "name": "orders",
            "tables": {"orders": {"required_attributes": {"region": "eu"}}},
        })
        assert explore_matches_required_attributes(explore, {"region": ["eu"]})
        assert not explore_matches_required_attributes(explore, {"region": ["us"]})
        assert not explore_matches_required_attributes(explore, {})

    def test_unrestricted_base_table(self, loader):
        explore = loader.parse_explore({"name": "users", "tables": {"users": {}}})
        assert explore_matches_required_attributes(explore, {})

    def test_joined_table_requirements_ignored(self, loader):
        explore = loader.parse_explore({
            "name": "orders",
            "joined_tables": [{"table": "customers"}],
            "tables": {
                "orders": {},
                "customers": {"required_attributes": {"pii": ["true"]}},
            },
        })
        assert explore_matches_required_attributes(explore, {})

    def test_explore_error_always_matches(self, loader):
        error = loader.parse_explore({
            "name": "payments",
            "base_table": "payments",
            "errors": ["missing column x"],
            "tables": {"payments": {"required_attributes": {"region": ["eu"]}}},
        })
        assert explore_matches_required_attributes(error, {})
