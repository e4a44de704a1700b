"""User settings domain model"""
from typing import Optional
from pydantic import BaseModel, Field


class UserSettingsBase(BaseModel):
    """Per-user preferences; ranges match the settings screen steppers"""
    pomodoro_work_mins: int = Field(25, ge=5, le=60)
    pomodoro_break_mins: int = Field(5, ge=1, le=30)
    study_goal_hrs: int = Field(4, ge=1, le=16)
    notify_email: bool = True
    notify_deadline: bool = True


class UserSettingsCreate(UserSettingsBase):
    """User settings creation model"""
    user_id: str


class UserSettingsUpdate(BaseModel):
    """User settings update model - all fields optional"""
    pomodoro_work_mins: Optional[int] = Field(None, ge=5, le=60)
    pomodoro_break_mins: Optional[int] = Field(None, ge=1, le=30)
    study_goal_hrs: Optional[int] = Field(None, ge=1, le=16)
    notify_email: Optional[bool] = None
    notify_deadline: Optional[bool] = None


class UserSettings(UserSettingsBase):
    """Complete user settings model from database"""
    user_id: str

    class Config:
        from_attributes = True
