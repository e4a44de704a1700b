"""Focus timer wiring - builds a controller for a signed-in user"""
import logging
from typing import Optional

from studify.infra.supabase.repositories import RepositoryFactory
from .controller import FocusSessionController
from .domain import TimerConfig
from .sink import SupabaseSessionLogSink
from .ticker import AsyncioTickSource, TickSource

logger = logging.getLogger(__name__)


async def load_timer_config(repositories: RepositoryFactory, user_id: str) -> TimerConfig:
    """
    Load the user's timer durations from user_settings.

    Falls back to the default durations when the user never saved settings
    or the settings cannot be read.

    Args:
        repositories: Repository factory bound to a Supabase client
        user_id: Owner of the settings row

    Returns:
        TimerConfig for the user
    """
    try:
        settings = await repositories.user_settings.find_for_user(user_id)
    except Exception as e:
        logger.error(f"Error loading user settings for {user_id}, using default durations: {e}")
        return TimerConfig()

    if settings is None:
        return TimerConfig()

    return TimerConfig.from_user_settings(settings)


async def create_focus_controller(
    repositories: RepositoryFactory,
    user_id: str,
    tick_source: Optional[TickSource] = None,
) -> FocusSessionController:
    """
    Build a FocusSessionController whose completed sessions go to pomodoro_sessions.

    Args:
        repositories: Repository factory bound to a Supabase client
        user_id: User the logged sessions belong to
        tick_source: Tick source to drive the countdown (defaults to the event loop)

    Returns:
        A fresh controller in Focus mode
    """
    config = await load_timer_config(repositories, user_id)
    sink = SupabaseSessionLogSink(repositories.pomodoro_sessions)

    controller = FocusSessionController(
        tick_source=tick_source or AsyncioTickSource(),
        sink=sink,
        config=config,
        user_id=user_id,
    )
    logger.info(f"Focus controller ready for user {user_id} ({config.focus_seconds // 60} min focus)")
    return controller
