from fastapi import APIRouter
from studify.api import health
from studify.features import stats

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(stats.router)
