from fastapi import APIRouter
from apiforge.api.routes_health import router as health_router
from apiforge.api.routes_catalog import router as catalog_router
from apiforge.api.routes_projects import router as projects_router
from apiforge.api.routes_files import router as files_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(catalog_router, tags=["catalog"])
router.include_router(projects_router, tags=["projects"])
router.include_router(files_router, tags=["files"])
