#!/usr/bin/env python
"""Start the Data Catalog Service."""

import os

import uvicorn

from catalog_svc.config import CONFIG_ENV_VAR, Config


if __name__ == "__main__":
    os.environ.setdefault(CONFIG_ENV_VAR, "config.yaml")
    config = Config.from_env()
    uvicorn.run(
        "catalog_svc.main:app",
        host=config.server.host,
        port=config.server.port,
        workers=config.server.workers,
        reload=config.server.reload,
    )
