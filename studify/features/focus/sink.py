"""Destinations for completed focus session records"""
import logging
from typing import Protocol

from studify.infra.supabase.repositories.pomodoro_sessions import PomodoroSessionRepository
from .domain import SessionLog

logger = logging.getLogger(__name__)


class SessionLogSink(Protocol):
    """Persists one SessionLog per call; raises on failure"""

    async def write(self, log: SessionLog) -> None:
        ...


class SupabaseSessionLogSink:
    """Writes session logs to the pomodoro_sessions table"""

    def __init__(self, repository: PomodoroSessionRepository):
        self._repository = repository

    async def write(self, log: SessionLog) -> None:
        session = await self._repository.create(log.to_session_create())
        logger.info(
            f"Pomodoro session {session.id} stored for user {log.user_id} "
            f"({log.duration_minutes} min)"
        )
