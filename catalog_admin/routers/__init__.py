"""API routers."""
from catalog_admin.routers.blueprints_router import router as blueprints_router
from catalog_admin.routers.catalog_router import router as catalog_router
from catalog_admin.routers.companies_router import router as companies_router
from catalog_admin.routers.dashboard_router import router as dashboard_router
from catalog_admin.routers.health_router import router as health_router
from catalog_admin.routers.projects_router import details_router
from catalog_admin.routers.projects_router import router as projects_router
from catalog_admin.routers.tools_router import router as tools_router

__all__ = [
    "blueprints_router",
    "catalog_router",
    "companies_router",
    "dashboard_router",
    "details_router",
    "health_router",
    "projects_router",
    "tools_router",
]
