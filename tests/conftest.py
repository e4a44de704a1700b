"""Shared test fixtures and configuration.

Provides deterministic stand-ins for the timer's collaborators (tick
source, session log sink, clock) and a chainable fake of the Supabase
query builder.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from studify.features.focus import (
    FocusSessionController,
    SessionLog,
    TickHandle,
    TimerConfig,
    TimerEvent,
)


# ---------------------------------------------------------------------------
# Timer collaborators
# ---------------------------------------------------------------------------


class ManualTickSource:
    """Tick source advanced explicitly by the test."""

    def __init__(self):
        self._subscriptions: Dict[int, tuple[TickHandle, Callable[[], None]]] = {}
        self.subscribe_calls = 0
        self.cancel_calls = 0

    def subscribe(self, callback):
        handle = TickHandle()
        self._subscriptions[id(handle)] = (handle, callback)
        self.subscribe_calls += 1
        return handle

    def cancel(self, handle):
        handle.cancelled = True
        self._subscriptions.pop(id(handle), None)
        self.cancel_calls += 1

    @property
    def active_count(self) -> int:
        return len(self._subscriptions)

    def fire(self, times: int = 1) -> None:
        """Deliver *times* ticks; stops early once nothing is subscribed."""
        for _ in range(times):
            if not self._subscriptions:
                return
            for handle, callback in list(self._subscriptions.values()):
                if not handle.cancelled:
                    callback()


class RecordingSink:
    """Session log sink that keeps every written record."""

    def __init__(self):
        self.logs: List[SessionLog] = []

    async def write(self, log: SessionLog) -> None:
        self.logs.append(log)


class FailingSink:
    """Session log sink whose data store is unreachable."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ConnectionError("sink unreachable")
        self.attempts = 0

    async def write(self, log: SessionLog) -> None:
        self.attempts += 1
        raise self.error


class SteppingClock:
    """Returns a new timestamp, one second later, on every call."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture()
def ticks():
    return ManualTickSource()


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def clock():
    return SteppingClock()


@pytest.fixture()
def events():
    return []


@pytest.fixture()
def controller(ticks, sink, clock, events):
    ctrl = FocusSessionController(
        tick_source=ticks,
        sink=sink,
        config=TimerConfig(),
        user_id="user-1",
        clock=clock,
    )
    ctrl.subscribe(events.append)
    yield ctrl
    ctrl.close()


@pytest.fixture()
def small_controller(ticks, sink, clock, events):
    """Controller with tiny durations so whole cycles fit in a few ticks."""
    ctrl = FocusSessionController(
        tick_source=ticks,
        sink=sink,
        config=TimerConfig(focus_seconds=120, short_break_seconds=3, long_break_seconds=5),
        user_id="user-1",
        clock=clock,
    )
    ctrl.subscribe(events.append)
    yield ctrl
    ctrl.close()


def event_types(events: List[TimerEvent]) -> List[str]:
    return [e.type.value for e in events]


# ---------------------------------------------------------------------------
# Supabase fake
# ---------------------------------------------------------------------------


def make_supabase_client(
    data: Optional[List[Dict[str, Any]]] = None,
    count: Optional[int] = None,
) -> MagicMock:
    """Build a MagicMock client whose query builder chains and returns *data*.

    Every builder method returns the same query object, so tests can assert
    on ``client.table.return_value.<method>`` calls.
    """
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "neq", "gt", "order", "limit", "insert", "update", "delete", "upsert"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    client.table.return_value = query
    return client
