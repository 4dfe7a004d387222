"""A bounded, thread-safe queue of events handed from the gamepad to the frontend."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Union

from .enums import ErrorCode, EventType, VanillaError
from .util import log

MAX_EVENT_COUNT = 100
EVENT_BUFFER_SIZE = 65536


@dataclass(frozen=True)
class Event:
    """One event: its type and the bytes that came with it."""

    type: Union[EventType, int]
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)


def _event_type(value: int) -> Union[EventType, int]:
    try:
        return EventType(value)
    except ValueError:
        return int(value)


class EventLoop:
    """Holds at most ``capacity`` events; when full, the oldest is dropped.

    Events can only be pushed and taken while the loop is active, that is
    between :meth:`start` and :meth:`stop`. Stopping discards whatever was
    not consumed and wakes every thread blocked in :meth:`wait`.
    """

    def __init__(self, capacity: int = MAX_EVENT_COUNT) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._events: Deque[Event] = deque()
        self._pushed = 0
        self._used = 0
        self._active = False
        self._cond = threading.Condition()

    @property
    def active(self) -> bool:
        with self._cond:
            return self._active

    def start(self) -> None:
        """Make the loop active with an empty queue."""
        with self._cond:
            self._events.clear()
            self._pushed = 0
            self._used = 0
            self._active = True
            self._cond.notify_all()

    def stop(self) -> None:
        """Deactivate the loop, drop unconsumed events and wake waiters."""
        with self._cond:
            self._active = False
            self._used += len(self._events)
            self._events.clear()
            self._cond.notify_all()

    def __enter__(self) -> "EventLoop":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def push(self, type: int, data: bytes = b"") -> Event:
        """Queue an event and return it."""
        payload = bytes(data)
        if len(payload) > EVENT_BUFFER_SIZE:
            raise ValueError(
                f"event data of {len(payload)} bytes exceeds {EVENT_BUFFER_SIZE}"
            )
        event = Event(_event_type(type), payload)
        with self._cond:
            if not self._active:
                raise VanillaError(ErrorCode.SHUTDOWN, "event loop is not active")
            if len(self._events) == self.capacity:
                self._events.popleft()
                log(
                    "SKIPPED EVENT TO PREVENT ROLLOVER "
                    f"({self._pushed} > {self._used} + {self.capacity})"
                )
                self._used += 1
            self._events.append(event)
            self._pushed += 1
            self._cond.notify_all()
        return event

    def _take(self) -> Optional[Event]:
        if self._active and self._events:
            self._used += 1
            return self._events.popleft()
        return None

    def poll(self) -> Optional[Event]:
        """Return the oldest event, or ``None`` if there is none or the loop is inactive."""
        with self._cond:
            return self._take()

    def wait(self, timeout: Optional[float] = None) -> Optional[Event]:
        """Block until an event arrives; ``None`` on timeout or when the loop stops."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._active and not self._events:
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(remaining)
            return self._take()

    def pending(self) -> int:
        """Number of events queued and not yet taken."""
        with self._cond:
            return len(self._events)