"""Tests for workspace loading, the explore cache and configuration."""

import asyncio
import time

import pytest
import yaml

from catalog_svc.cache.memory import ExploreCache
from catalog_svc.config import CONFIG_ENV_VAR, Config
from catalog_svc.errors import NotFoundError
from catalog_svc.permissions.ability import SpaceAccessLevel
from catalog_svc.stores.workspace import Workspace, load_workspace


class TestWorkspaceLoader:
    @pytest.mark.asyncio
    async def test_projects(self, workspace):
        summary = await workspace.projects.get_summary("jaffle-shop")
        assert summary.organization_uuid == "acme"
        assert summary.name == "Jaffle Shop"

        with pytest.raises(NotFoundError):
            await workspace.projects.get_summary("nope")

    @pytest.mark.asyncio
    async def test_explores_cached_in_order(self, workspace):
        explores = await workspace.projects.get_explores_from_cache("jaffle-shop")
        assert [e.name for e in explores] == ["orders", "users", "payments"]

    @pytest.mark.asyncio
    async def test_uncompiled_project_not_cached(self, workspace):
        assert await workspace.projects.get_explores_from_cache("empty-project") is None

    @pytest.mark.asyncio
    async def test_user_attributes_normalised(self, workspace):
        values = await workspace.user_attributes.get_attribute_values("acme", "analyst-eu")
        assert values == {"region": ["eu"], "pii": ["false"]}
        assert await workspace.user_attributes.get_attribute_values("acme", "nobody") == {}

    @pytest.mark.asyncio
    async def test_spaces_and_access(self, workspace):
        spaces = await workspace.spaces.find("jaffle-shop")
        assert [s.uuid for s in spaces] == ["shared", "finance", "leadership"]
        assert spaces[1].is_private

        access = await workspace.spaces.get_user_space_access("analyst-eu", "finance")
        assert access == SpaceAccessLevel.VIEWER
        assert await workspace.spaces.get_user_space_access("analyst-eu", "leadership") is None

    @pytest.mark.asyncio
    async def test_chart_space_names(self, workspace):
        charts = await workspace.charts.find("jaffle-shop", "orders")
        assert [(c.uuid, c.space_name) for c in charts] == [
            ("c1", "Shared"), ("c2", "Leadership"), ("c3", "Finance"),
        ]

    @pytest.mark.asyncio
    async def test_search_index_skips_errors(self, workspace):
        assert await workspace.search_index.search("jaffle-shop", "payments") == []

    def test_load_file_with_explores_file(self, tmp_path, explore_data):
        (tmp_path / "explores.yaml").write_text(yaml.safe_dump(explore_data))
        (tmp_path / "workspace.yaml").write_text(yaml.safe_dump({
            "projects": [{
                "uuid": "p1",
                "organization_uuid": "acme",
                "explores_file": "explores.yaml",
            }],
        }))

        workspace = asyncio.run(load_workspace(tmp_path / "workspace.yaml"))

        assert [e.name for e in workspace.projects.cache.get("p1")] == [
            "orders", "users", "payments",
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            asyncio.run(load_workspace(tmp_path / "nope.yaml"))


class TestExploreCache:
    @pytest.mark.asyncio
    async def test_get_set(self):
        cache = ExploreCache()
        assert cache.get("p1") is None

        await cache.set("p1", [])
        assert cache.get("p1") == []
        assert cache.stats["hits"] == 1
        assert cache.stats["misses"] == 1

    @pytest.mark.asyncio
    async def test_snapshot_replaced(self, workspace):
        explores = workspace.projects.cache.get("jaffle-shop")
        cache = ExploreCache()
        await cache.set("p1", explores)
        await cache.set("p1", explores[:1])
        assert [e.name for e in cache.get("p1")] == ["orders"]

    @pytest.mark.asyncio
    async def test_ttl(self):
        cache = ExploreCache(default_ttl_seconds=60)
        await cache.set("p1", [])
        entry = cache.get_entry("p1")
        assert entry.ttl_seconds == 60
        assert not entry.is_expired

        await cache.set("p2", [], ttl_seconds=0.001)
        time.sleep(0.01)
        assert cache.get("p2") is None

    @pytest.mark.asyncio
    async def test_invalidate(self):
        cache = ExploreCache()
        await cache.set("p1", [])
        assert await cache.invalidate("p1")
        assert not await cache.invalidate("p1")
        assert cache.size == 0


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.server.port == 8060
        assert config.explore_ttl is None
        assert config.search.max_results == 50

    def test_from_dict(self):
        config = Config.from_dict({
            "server": {"port": 9000},
            "cache": {"explore_ttl_seconds": 30},
            "logging": {"level": "DEBUG"},
        })
        assert config.server.port == 9000
        assert config.explore_ttl == 30
        assert config.logging.level == "DEBUG"
        assert config.workspace.definition_file is None

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("workspace:\n  definition_file: ws.yaml\nsearch:\n  max_results: 5\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        config = Config.from_env()
        assert config.workspace.definition_file == "ws.yaml"
        assert config.search.max_results == 5

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert Config.from_env() == Config()

    def test_workspace_create(self):
        workspace = Workspace.create(cache_ttl_seconds=10, max_search_results=3)
        assert workspace.projects.cache.default_ttl_seconds == 10
        assert workspace.search_index.max_results == 3
