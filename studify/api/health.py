"""Health check endpoint"""

from fastapi import APIRouter

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """Liveness check; exposes nothing about the deployment"""
    return {"status": "ok"}
