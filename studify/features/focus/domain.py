"""Domain models for the focus timer"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from studify.models.pomodoro_session import PomodoroSessionCreate
from studify.models.user_settings import UserSettings

# Every Nth completed focus interval is followed by a long break
LONG_BREAK_EVERY = 4


class TimerMode(str, Enum):
    """Timer mode"""
    FOCUS = "focus"
    SHORT_BREAK = "short"
    LONG_BREAK = "long"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    TimerMode.FOCUS: "Focus",
    TimerMode.SHORT_BREAK: "Short Break",
    TimerMode.LONG_BREAK: "Long Break",
}


class TimerConfig(BaseModel):
    """Configured duration of each mode, in seconds"""
    focus_seconds: int = Field(25 * 60, gt=0)
    short_break_seconds: int = Field(5 * 60, gt=0)
    long_break_seconds: int = Field(15 * 60, gt=0)

    def duration(self, mode: TimerMode) -> int:
        if mode == TimerMode.FOCUS:
            return self.focus_seconds
        if mode == TimerMode.SHORT_BREAK:
            return self.short_break_seconds
        return self.long_break_seconds

    @classmethod
    def from_user_settings(cls, settings: UserSettings) -> "TimerConfig":
        """Build a config from saved settings; long break keeps its default"""
        return cls(
            focus_seconds=settings.pomodoro_work_mins * 60,
            short_break_seconds=settings.pomodoro_break_mins * 60,
        )


class TimerState(BaseModel):
    """Mutable state owned by a FocusSessionController"""
    mode: TimerMode = TimerMode.FOCUS
    remaining_seconds: int = Field(ge=0)
    is_running: bool = False
    completed_focus_count: int = Field(0, ge=0)
    active_session_started_at: Optional[datetime] = None
    subject_label: str = ""


class SessionLog(BaseModel):
    """Record of one completed focus interval, handed to a SessionLogSink"""
    user_id: str
    subject_label: Optional[str] = None
    duration_minutes: int
    started_at: datetime
    completed_at: datetime
    was_completed: bool = True

    def to_session_create(self) -> PomodoroSessionCreate:
        """Map to the pomodoro_sessions row layout"""
        return PomodoroSessionCreate(
            user_id=self.user_id,
            subject=self.subject_label,
            duration_mins=self.duration_minutes,
            started_at=self.started_at,
            completed_at=self.completed_at,
            was_completed=self.was_completed,
        )


class TimerEventType(str, Enum):
    """Events published to controller listeners"""
    TICK = "tick"
    MODE_CHANGED = "mode_changed"
    RESET = "reset"
    SESSION_LOGGED = "session_logged"
    SESSION_LOG_FAILED = "session_log_failed"


class TimerEvent(BaseModel):
    """Notification delivered to controller listeners"""
    type: TimerEventType
    state: TimerState
    session_log: Optional[SessionLog] = None
    error: Optional[str] = None
