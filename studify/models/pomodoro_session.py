"""Pomodoro session domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class PomodoroSessionBase(BaseModel):
    """Columns of a pomodoro_sessions row"""
    user_id: str
    subject: Optional[str] = None
    duration_mins: Optional[int] = Field(None, ge=0)
    started_at: datetime
    completed_at: Optional[datetime] = None
    was_completed: bool = True


class PomodoroSessionCreate(PomodoroSessionBase):
    """Pomodoro session creation model"""
    pass


class PomodoroSessionUpdate(BaseModel):
    """Pomodoro session update model - all fields optional"""
    subject: Optional[str] = None
    completed_at: Optional[datetime] = None
    was_completed: Optional[bool] = None


class PomodoroSession(PomodoroSessionBase):
    """Complete pomodoro session model from database"""
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
