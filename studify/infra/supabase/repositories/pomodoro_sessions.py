"""Pomodoro sessions repository"""
from typing import List, Dict, Any

from supabase import Client  # type: ignore

from studify.models.pomodoro_session import (
    PomodoroSession,
    PomodoroSessionCreate,
    PomodoroSessionUpdate,
)

from .base import BaseRepository


class PomodoroSessionRepository(
    BaseRepository[PomodoroSession, PomodoroSessionCreate, PomodoroSessionUpdate]
):
    """Repository for logged focus sessions"""

    def __init__(self, client: Client):
        super().__init__(client, "pomodoro_sessions", PomodoroSession)

    async def find_durations_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Fetch ``id`` and ``duration_mins`` of every session a user logged"""
        return await self.select_columns_by_user(user_id, "id, duration_mins")
