"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from catalog_admin import __version__
from catalog_admin.config import get_settings
from catalog_admin.db import Store
from catalog_admin.exceptions import ReferentialIntegrityError, RequiredValueMissing, UniqueConstraintViolation
from catalog_admin.logging_config import configure_logging, get_logger
from catalog_admin.middleware.correlation_id import CorrelationIdMiddleware
from catalog_admin.routers import (
    blueprints_router,
    catalog_router,
    companies_router,
    dashboard_router,
    details_router,
    health_router,
    projects_router,
    tools_router,
)

logger = get_logger(__name__)


async def unique_violation_handler(request: Request, exc: UniqueConstraintViolation) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


async def referential_error_handler(request: Request, exc: ReferentialIntegrityError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


async def required_value_handler(request: Request, exc: RequiredValueMissing) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": exc.message})


def create_app(store: Optional[Store] = None) -> FastAPI:
    """
    Build the app. A store passed in (tests) is used as is and left open;
    otherwise one is built from settings at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown: logging, store."""
        configure_logging()
        owns_store = store is None
        app.state.store = store or Store.from_settings(get_settings())
        logger.info("app_started", version=__version__)
        yield
        if owns_store:
            await app.state.store.dispose()
        logger.info("app_shutdown")

    app = FastAPI(
        title="Catalog Admin",
        version=__version__,
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store
    app.add_middleware(CorrelationIdMiddleware)
    app.add_exception_handler(UniqueConstraintViolation, unique_violation_handler)
    app.add_exception_handler(ReferentialIntegrityError, referential_error_handler)
    app.add_exception_handler(RequiredValueMissing, required_value_handler)

    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(companies_router)
    app.include_router(tools_router)
    app.include_router(projects_router)
    app.include_router(details_router)
    app.include_router(blueprints_router)
    app.include_router(dashboard_router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint: app name and version."""
        return {"name": "catalog_admin", "version": __version__}

    return app


app = create_app()
