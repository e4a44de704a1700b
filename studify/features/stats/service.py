"""Stats aggregation over a user's tasks and focus sessions"""

import asyncio
import logging
from typing import Any, Dict, List

from studify.infra.supabase.repositories import RepositoryFactory
from studify.models.task import TaskStatus
from studify.features.stats.domain import UserStats

logger = logging.getLogger(__name__)


class StatsService:
    """Computes UserStats from rows fetched through the repositories"""

    def __init__(self, repositories: RepositoryFactory):
        self.repositories = repositories

    async def get_user_stats(self, user_id: str) -> UserStats:
        """
        Fetch the user's task statuses and session durations concurrently and aggregate them.

        Raises whatever the repositories raise; nothing is retried.
        """
        tasks, sessions = await asyncio.gather(
            self.repositories.tasks.find_statuses_by_user(user_id),
            self.repositories.pomodoro_sessions.find_durations_by_user(user_id),
        )

        stats = self.aggregate(tasks, sessions)
        logger.info(
            f"Stats for user {user_id}: {stats.total_tasks} tasks, "
            f"{stats.pomodoros_completed} sessions"
        )
        return stats

    @staticmethod
    def aggregate(tasks: List[Dict[str, Any]], sessions: List[Dict[str, Any]]) -> UserStats:
        return UserStats(
            total_tasks=len(tasks),
            completed_tasks=sum(1 for t in tasks if t.get("status") == TaskStatus.DONE.value),
            total_focus_mins=sum(s.get("duration_mins") or 0 for s in sessions),
            pomodoros_completed=len(sessions),
        )
