"""Configuration for catalog service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


CONFIG_ENV_VAR = "CATALOG_SVC_CONFIG"


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8060
    workers: int = 1
    reload: bool = False


@dataclass
class WorkspaceConfig:
    """Where projects, explores, spaces and charts are loaded from."""
    # Path to workspace definition file (YAML)
    definition_file: str | None = None


@dataclass
class CacheConfig:
    """Compiled explore cache configuration."""
    # 0 = snapshots never expire
    explore_ttl_seconds: float = 0.0


@dataclass
class SearchConfig:
    """Catalog search configuration."""
    max_results: int = 50


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Config:
    """Main configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            server=ServerConfig(**data.get("server", {})),
            workspace=WorkspaceConfig(**data.get("workspace", {})),
            cache=CacheConfig(**data.get("cache", {})),
            search=SearchConfig(**data.get("search", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    @classmethod
    def from_yaml(cls, path: str) -> Config:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> Config:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> Config:
        """Load config from the file named by CATALOG_SVC_CONFIG, or defaults."""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return cls()
        if path.endswith(".json"):
            return cls.from_json(path)
        return cls.from_yaml(path)

    @property
    def explore_ttl(self) -> float | None:
        return self.cache.explore_ttl_seconds or None
