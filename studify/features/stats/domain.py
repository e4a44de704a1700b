"""Domain models for the stats feature"""

from pydantic import BaseModel, ConfigDict, Field


class UserStats(BaseModel):
    """Aggregated study statistics of one user (camelCase on the wire)"""
    model_config = ConfigDict(populate_by_name=True)

    total_tasks: int = Field(0, alias="totalTasks")
    completed_tasks: int = Field(0, alias="completedTasks")
    total_focus_mins: int = Field(0, alias="totalFocusMins")
    pomodoros_completed: int = Field(0, alias="pomodorosCompleted")
