"""User settings repository"""
from typing import Optional

from supabase import Client  # type: ignore

from studify.models.user_settings import UserSettings, UserSettingsCreate, UserSettingsUpdate

from .base import BaseRepository


class UserSettingsRepository(BaseRepository[UserSettings, UserSettingsCreate, UserSettingsUpdate]):
    """Repository for user_settings, keyed by user_id (one row per user)"""

    def __init__(self, client: Client):
        super().__init__(client, "user_settings", UserSettings)

    async def find_for_user(self, user_id: str) -> Optional[UserSettings]:
        """Get the settings row of a user, or None when it was never saved"""
        response = (
            self._client.table(self._table_name)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])
