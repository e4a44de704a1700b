"""Focus timer feature module"""

from studify.features.focus.controller import FocusSessionController, TimerListener
from studify.features.focus.domain import (
    LONG_BREAK_EVERY,
    SessionLog,
    TimerConfig,
    TimerEvent,
    TimerEventType,
    TimerMode,
    TimerState,
)
from studify.features.focus.service import create_focus_controller, load_timer_config
from studify.features.focus.sink import SessionLogSink, SupabaseSessionLogSink
from studify.features.focus.ticker import AsyncioTickSource, TickHandle, TickSource

__all__ = [
    "FocusSessionController",
    "TimerListener",
    "LONG_BREAK_EVERY",
    "SessionLog",
    "TimerConfig",
    "TimerEvent",
    "TimerEventType",
    "TimerMode",
    "TimerState",
    "create_focus_controller",
    "load_timer_config",
    "SessionLogSink",
    "SupabaseSessionLogSink",
    "AsyncioTickSource",
    "TickHandle",
    "TickSource",
]
