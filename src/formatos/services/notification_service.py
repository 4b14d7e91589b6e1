from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

from formatos.domain.models import INFO, NOTIFICATION_KINDS, Notification

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], ScheduledCall]


def thread_timer_scheduler(delay: float, callback: Callable[[], None]) -> ScheduledCall:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class NotificationQueue:
    """
    Short-lived user-facing messages.

    Every pushed message removes itself after ``ttl_seconds``. ``close`` cancels
    the pending removals so nothing fires after teardown.
    """

    def __init__(
        self,
        ttl_seconds: float = 5.0,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._scheduler = scheduler or thread_timer_scheduler
        self._clock = clock
        self._lock = threading.Lock()
        self._items: dict[int, Notification] = {}
        self._timers: dict[int, ScheduledCall] = {}
        self._last_id = 0
        self._closed = False

    def push(self, message: str, kind: str = INFO) -> int:
        if kind not in NOTIFICATION_KINDS:
            raise ValueError(f"Unknown notification kind: {kind}")
        now = self._clock()
        with self._lock:
            notification_id = max(int(now * 1000), self._last_id + 1)
            self._last_id = notification_id
            if self._closed:
                return notification_id
            self._items[notification_id] = Notification(
                notification_id=notification_id,
                message=message,
                kind=kind,
                created_at=datetime.fromtimestamp(now, tz=timezone.utc),
            )
        timer = self._scheduler(self._ttl_seconds, lambda: self.remove(notification_id))
        with self._lock:
            if notification_id in self._items:
                self._timers[notification_id] = timer
            else:
                timer.cancel()
        logger.debug("notification %s (%s): %s", notification_id, kind, message)
        return notification_id

    def remove(self, notification_id: int) -> None:
        with self._lock:
            self._items.pop(notification_id, None)
            timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()

    @property
    def items(self) -> list[Notification]:
        with self._lock:
            return list(self._items.values())

    def close(self) -> None:
        with self._lock:
            self._closed = True
            timers = list(self._timers.values())
            self._timers.clear()
            self._items.clear()
        for timer in timers:
            timer.cancel()
