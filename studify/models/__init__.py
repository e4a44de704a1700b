"""Domain models for the application"""
from .task import Task, TaskCreate, TaskUpdate, TaskStatus, TaskPriority
from .pomodoro_session import PomodoroSession, PomodoroSessionCreate, PomodoroSessionUpdate
from .user_settings import UserSettings, UserSettingsCreate, UserSettingsUpdate

__all__ = [
    'Task', 'TaskCreate', 'TaskUpdate', 'TaskStatus', 'TaskPriority',
    'PomodoroSession', 'PomodoroSessionCreate', 'PomodoroSessionUpdate',
    'UserSettings', 'UserSettingsCreate', 'UserSettingsUpdate',
]
