"""Focus Session Controller - Pomodoro state machine with session logging"""
import asyncio
import itertools
import logging
import math
from datetime import datetime
from typing import Callable, Dict, Optional, Set

from studify.utils.datetime_helper import format_mm_ss, utc_now
from .domain import (
    LONG_BREAK_EVERY,
    SessionLog,
    TimerConfig,
    TimerEvent,
    TimerEventType,
    TimerMode,
    TimerState,
)
from .sink import SessionLogSink
from .ticker import TickHandle, TickSource

logger = logging.getLogger(__name__)

TimerListener = Callable[[TimerEvent], None]


class FocusSessionController:
    """
    Drives a countdown through focus / short break / long break intervals.

    All transitions are synchronous. The only asynchronous work is writing a
    SessionLog when a started focus interval runs down to zero; that write is
    scheduled on the running event loop and never awaited by a transition.
    Its outcome is published to listeners as SESSION_LOGGED or
    SESSION_LOG_FAILED.

    The tick subscription exists exactly while ``is_running`` is True.
    """

    def __init__(
        self,
        tick_source: TickSource,
        sink: SessionLogSink,
        config: Optional[TimerConfig] = None,
        user_id: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tick_source = tick_source
        self._sink = sink
        self._config = config or TimerConfig()
        self._user_id = user_id
        self._clock = clock

        self._state = TimerState(
            mode=TimerMode.FOCUS,
            remaining_seconds=self._config.duration(TimerMode.FOCUS),
        )
        self._tick_handle: Optional[TickHandle] = None
        self._listeners: Dict[int, TimerListener] = {}
        self._listener_ids = itertools.count(1)
        self._pending_writes: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Read access for rendering
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        """Snapshot of the current state"""
        return self._state.model_copy()

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def duration_seconds(self) -> int:
        """Configured duration of the current mode"""
        return self._config.duration(self._state.mode)

    @property
    def formatted_remaining(self) -> str:
        return format_mm_ss(self._state.remaining_seconds)

    @property
    def progress(self) -> float:
        """Fraction of the current interval still remaining (1.0 = fresh)"""
        return self._state.remaining_seconds / self.duration_seconds

    @property
    def mode_label(self) -> str:
        return self._state.mode.label

    @property
    def focus_minutes(self) -> int:
        """Focus time completed in this controller's lifetime"""
        return self._state.completed_focus_count * (self._config.focus_seconds // 60)

    @property
    def long_breaks_taken(self) -> int:
        return math.ceil(self._state.completed_focus_count / LONG_BREAK_EVERY)

    # ------------------------------------------------------------------
    # Caller-facing operations
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start or resume the countdown. Returns False if already running."""
        if self._state.is_running:
            logger.debug("start() ignored: timer already running")
            return False

        fresh_focus = (
            self._state.mode == TimerMode.FOCUS
            and self._state.remaining_seconds == self._config.duration(TimerMode.FOCUS)
        )
        if fresh_focus and self._state.active_session_started_at is None:
            self._state.active_session_started_at = self._clock()

        self._state.is_running = True
        self._tick_handle = self._tick_source.subscribe(self.tick)
        logger.debug(f"Timer started in {self._state.mode.value} mode, {self.formatted_remaining} left")
        return True

    def pause(self) -> bool:
        """Halt the countdown in place. Returns False if not running."""
        if not self._state.is_running:
            logger.debug("pause() ignored: timer not running")
            return False

        self._stop_ticking()
        logger.debug(f"Timer paused at {self.formatted_remaining}")
        return True

    def tick(self) -> None:
        """Advance the countdown by one second"""
        if not self._state.is_running:
            # A tick that raced a pause/reset; the subscription is already gone
            logger.debug("Stale tick ignored")
            return

        self._state.remaining_seconds = max(self._state.remaining_seconds - 1, 0)
        self._notify(TimerEventType.TICK)

        if self._state.remaining_seconds == 0:
            self._complete()

    def reset(self) -> None:
        """Restart the current interval from its full duration without logging"""
        self._stop_ticking()
        self._state.remaining_seconds = self.duration_seconds
        self._state.active_session_started_at = None
        logger.debug(f"Timer reset in {self._state.mode.value} mode")
        self._notify(TimerEventType.RESET)

    def skip(self) -> None:
        """
        Move on to the next interval without completing the current one.

        Skipped focus work is neither counted nor logged; the next mode is the
        one a natural completion would have led to.
        """
        if self._state.mode == TimerMode.FOCUS:
            next_mode = self._break_after(self._state.completed_focus_count + 1)
        else:
            next_mode = TimerMode.FOCUS

        logger.info(f"Skipping {self._state.mode.value} interval, next: {next_mode.value}")
        self._switch_mode(next_mode)

    def select_mode(self, mode: TimerMode) -> bool:
        """Switch mode manually. Rejected while the timer is running."""
        if self._state.is_running:
            logger.debug(f"select_mode({mode.value}) ignored: stop the timer first")
            return False

        self._switch_mode(mode)
        return True

    def set_subject_label(self, label: str) -> None:
        """Subject attached to the next logged session"""
        self._state.subject_label = label

    def set_user_id(self, user_id: Optional[str]) -> None:
        self._user_id = user_id

    # ------------------------------------------------------------------
    # Listeners and teardown
    # ------------------------------------------------------------------

    def subscribe(self, listener: TimerListener) -> int:
        """Register a listener; returns a handle for unsubscribe()"""
        handle = next(self._listener_ids)
        self._listeners[handle] = listener
        return handle

    def unsubscribe(self, handle: int) -> bool:
        return self._listeners.pop(handle, None) is not None

    def close(self) -> None:
        """Stop ticking and drop all listeners. In-flight log writes still finish."""
        self._stop_ticking()
        self._listeners.clear()

    async def wait_for_emissions(self) -> None:
        """Wait until every scheduled session log write has finished"""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    # ------------------------------------------------------------------
    # Internal transitions
    # ------------------------------------------------------------------

    def _complete(self) -> None:
        if self._state.mode == TimerMode.FOCUS:
            self._state.completed_focus_count += 1
            if self._state.active_session_started_at is not None:
                self._emit(self._build_log())
                self._state.active_session_started_at = None
            next_mode = self._break_after(self._state.completed_focus_count)
        else:
            next_mode = TimerMode.FOCUS

        logger.info(
            f"{self._state.mode.value} interval completed "
            f"(focus count {self._state.completed_focus_count}), next: {next_mode.value}"
        )
        self._switch_mode(next_mode)

    def _switch_mode(self, mode: TimerMode) -> None:
        self._stop_ticking()
        self._state.mode = mode
        self._state.remaining_seconds = self._config.duration(mode)
        self._state.active_session_started_at = None
        self._notify(TimerEventType.MODE_CHANGED)

    @staticmethod
    def _break_after(focus_count: int) -> TimerMode:
        if focus_count % LONG_BREAK_EVERY == 0:
            return TimerMode.LONG_BREAK
        return TimerMode.SHORT_BREAK

    def _stop_ticking(self) -> None:
        self._state.is_running = False
        if self._tick_handle is not None:
            self._tick_source.cancel(self._tick_handle)
            self._tick_handle = None

    def _build_log(self) -> Optional[SessionLog]:
        if self._user_id is None:
            return None
        return SessionLog(
            user_id=self._user_id,
            subject_label=self._state.subject_label or None,
            duration_minutes=self._config.focus_seconds // 60,
            started_at=self._state.active_session_started_at,
            completed_at=self._clock(),
            was_completed=True,
        )

    def _emit(self, log: Optional[SessionLog]) -> None:
        if log is None:
            logger.warning("Focus interval completed without a signed-in user; session not logged")
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("No running event loop; session log could not be scheduled")
            self._notify(TimerEventType.SESSION_LOG_FAILED, session_log=log, error="no running event loop")
            return

        task = loop.create_task(self._write_log(log))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_log(self, log: SessionLog) -> None:
        try:
            await self._sink.write(log)
        except Exception as e:
            logger.error(f"Error writing session log for user {log.user_id}: {e}")
            self._notify(TimerEventType.SESSION_LOG_FAILED, session_log=log, error=str(e))
            return

        self._notify(TimerEventType.SESSION_LOGGED, session_log=log)

    def _notify(
        self,
        event_type: TimerEventType,
        session_log: Optional[SessionLog] = None,
        error: Optional[str] = None,
    ) -> None:
        if not self._listeners:
            return

        event = TimerEvent(type=event_type, state=self.state, session_log=session_log, error=error)
        for listener in list(self._listeners.values()):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Timer listener failed on {event_type.value}")
