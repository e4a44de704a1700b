"""Repository factory and exports"""
from supabase import Client
from .tasks import TaskRepository
from .pomodoro_sessions import PomodoroSessionRepository
from .user_settings import UserSettingsRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._pomodoro_sessions: PomodoroSessionRepository = None
        self._user_settings: UserSettingsRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def pomodoro_sessions(self) -> PomodoroSessionRepository:
        """Get pomodoro sessions repository"""
        if self._pomodoro_sessions is None:
            self._pomodoro_sessions = PomodoroSessionRepository(self._client)
        return self._pomodoro_sessions

    @property
    def user_settings(self) -> UserSettingsRepository:
        """Get user settings repository"""
        if self._user_settings is None:
            self._user_settings = UserSettingsRepository(self._client)
        return self._user_settings


__all__ = [
    'RepositoryFactory',
    'TaskRepository',
    'PomodoroSessionRepository',
    'UserSettingsRepository',
]
