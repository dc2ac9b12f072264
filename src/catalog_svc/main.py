"""FastAPI application - Data Catalog Service.

Serves access-filtered catalog listings, search, table metadata and chart
analytics for a project's compiled explores.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .catalog.types import CatalogType
from .config import Config
from .errors import CatalogError, ForbiddenError, NotFoundError
from .identity.extractor import extract_identity
from .identity.types import CallerIdentity
from .permissions.ability import Ability, RoleAbility
from .service import CatalogService
from .stores.workspace import Workspace, WorkspaceLoader


logger = logging.getLogger(__name__)

AbilityFactory = Callable[[CallerIdentity], Ability]


# Response models
class CatalogResponse(BaseModel):
    status: str = "ok"
    results: list[dict[str, Any]]


class MetadataResponse(BaseModel):
    status: str = "ok"
    results: dict[str, Any]


class AnalyticsResponse(BaseModel):
    status: str = "ok"
    results: dict[str, Any]


class HealthResponse(BaseModel):
    status: str
    cache: dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


def get_service(request: Request) -> CatalogService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


def get_caller(request: Request) -> CallerIdentity:
    return extract_identity(request)


def get_ability(request: Request, caller: CallerIdentity = Depends(get_caller)) -> Ability:
    factory: AbilityFactory = request.app.state.ability_factory
    return factory(caller)


def _parse_catalog_type(value: str | None) -> CatalogType | None:
    if not value:
        return None
    try:
        return CatalogType(value.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown catalog type: {value}")


def create_app(
    config: Config | None = None,
    workspace: Workspace | None = None,
    ability_factory: AbilityFactory = RoleAbility,
) -> FastAPI:
    """
    Build the application.

    Without a workspace, one is created on startup and loaded from
    `config.workspace.definition_file` when set.
    """
    config = config or Config.from_env()
    logging.basicConfig(level=config.logging.level.upper(), format=config.logging.format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting data catalog service...")

        ws = workspace
        if ws is None:
            ws = Workspace.create(
                cache_ttl_seconds=config.explore_ttl,
                max_search_results=config.search.max_results,
            )
            if config.workspace.definition_file:
                await WorkspaceLoader(ws).load_file(config.workspace.definition_file)
            else:
                logger.warning("No workspace definition file configured; catalog is empty")

        app.state.workspace = ws
        app.state.service = CatalogService.from_workspace(ws)
        logger.info("Data catalog service started")

        yield

        logger.info("Data catalog service stopped")

    app = FastAPI(
        title="Data Catalog Service",
        description="Access-filtered catalog of a project's tables and fields.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.ability_factory = ability_factory

    @app.exception_handler(ForbiddenError)
    async def forbidden_error_handler(request: Request, exc: ForbiddenError):
        return JSONResponse(
            status_code=403,
            content={"error": "Forbidden", "detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": "Not found", "detail": str(exc)},
        )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        logger.error(f"Catalog error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Catalog error", "detail": str(exc)},
        )

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request):
        """Health check endpoint."""
        ws: Workspace | None = getattr(request.app.state, "workspace", None)
        return HealthResponse(
            status="healthy" if ws else "starting",
            cache=ws.projects.cache.stats if ws else {},
        )

    @app.get(
        "/api/v1/projects/{project_uuid}/dataCatalog",
        response_model=CatalogResponse,
        responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def get_catalog(
        project_uuid: str,
        search: str | None = Query(None, description="Free-text search"),
        type: str | None = Query(None, description="'table' (default) or 'field'"),
        caller: CallerIdentity = Depends(get_caller),
        ability: Ability = Depends(get_ability),
        service: CatalogService = Depends(get_service),
    ):
        """
        List the tables of a project, its fields (`type=field`), or search
        both (`search=...`). Entries the caller lacks attributes for are
        left out.
        """
        results = await service.get_catalog(
            caller,
            ability,
            project_uuid,
            search=search,
            type=_parse_catalog_type(type),
        )
        return CatalogResponse(results=[item.to_dict() for item in results])

    @app.get(
        "/api/v1/projects/{project_uuid}/dataCatalog/{table}/metadata",
        response_model=MetadataResponse,
        responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def get_metadata(
        project_uuid: str,
        table: str,
        caller: CallerIdentity = Depends(get_caller),
        ability: Ability = Depends(get_ability),
        service: CatalogService = Depends(get_service),
    ):
        """Metadata and visible fields of one table."""
        metadata = await service.get_metadata(caller, ability, project_uuid, table)
        return MetadataResponse(results=metadata.to_dict())

    @app.get(
        "/api/v1/projects/{project_uuid}/dataCatalog/{table}/analytics",
        response_model=AnalyticsResponse,
        responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def get_analytics(
        project_uuid: str,
        table: str,
        caller: CallerIdentity = Depends(get_caller),
        ability: Ability = Depends(get_ability),
        service: CatalogService = Depends(get_service),
    ):
        """Charts built on a table, in spaces the caller can view."""
        analytics = await service.get_analytics(caller, ability, project_uuid, table)
        return AnalyticsResponse(results=analytics.to_dict())

    return app


app = create_app()
