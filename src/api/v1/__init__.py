"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.dashboard import router as dashboard_router
from api.v1.routes.exchanges import router as exchanges_router
from api.v1.routes.portfolio import router as portfolio_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.reviews import router as reviews_router
from api.v1.routes.service_requests import router as service_requests_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(reviews_router)
router.include_router(portfolio_router)
router.include_router(service_requests_router)
router.include_router(exchanges_router)
router.include_router(dashboard_router)
