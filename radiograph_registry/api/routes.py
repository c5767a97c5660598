from fastapi import APIRouter

from radiograph_registry.api.health import router as health_router
from radiograph_registry.api.patients import router as patients_router
from radiograph_registry.api.web import router as web_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(patients_router, prefix="/api", tags=["patients"])
router.include_router(web_router, tags=["web"])
