"""Stats API endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from studify.infra.supabase import get_supabase_client
from studify.infra.supabase.repositories import RepositoryFactory
from studify.middleware.auth import get_current_user_id
from studify.features.stats.domain import UserStats
from studify.features.stats.service import StatsService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/stats", tags=["stats"])


def get_repositories() -> RepositoryFactory:
    """FastAPI dependency providing repositories on the shared Supabase client"""
    return RepositoryFactory(get_supabase_client())


@router.get("/{user_id}", response_model=UserStats)
async def get_user_stats(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    repositories: RepositoryFactory = Depends(get_repositories),
):
    """
    Get aggregated task and focus statistics of a user.

    Users can only read their own stats.

    Returns:
        totalTasks, completedTasks, totalFocusMins, pomodorosCompleted

    Raises:
        401: Missing or invalid token
        403: Token belongs to a different user
        500: Data store error
    """
    if current_user_id != user_id:
        logger.warning(f"User {current_user_id} tried to read stats of {user_id}")
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        service = StatsService(repositories)
        return await service.get_user_stats(user_id)

    except Exception as e:
        logger.error(f"Stats error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
