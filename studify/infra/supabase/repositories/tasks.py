"""Task repository"""
from typing import List, Dict, Any

from supabase import Client  # type: ignore

from studify.models.task import Task, TaskCreate, TaskUpdate

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)

    async def find_statuses_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Fetch ``id`` and ``status`` of every task a user owns"""
        return await self.select_columns_by_user(user_id, "id, status")
