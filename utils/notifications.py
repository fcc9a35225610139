"""
Best-effort delivery of alert events to notification channels.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Protocol

from models.guard import AlertEvent

logger = logging.getLogger(__name__)


class NotificationChannel(Protocol):
    async def send(self, message: str) -> None: ...


class AlertDispatcher:
    """
    Fire-and-forget dispatcher.

    Every event is sent to every channel concurrently with a per-send timeout.
    Failures are logged and swallowed; nothing is retried.
    """

    def __init__(self, channels: list[NotificationChannel], timeout_seconds: float = 5.0):
        self.channels = channels
        self.timeout_seconds = timeout_seconds
        self._pending: set[asyncio.Task] = set()

    async def dispatch(self, events: Iterable[AlertEvent]) -> int:
        """Send events and wait for the attempts to finish. Returns the number of successful sends."""
        sends = [
            (channel, event)
            for event in events
            for channel in self.channels
        ]
        if not sends:
            return 0

        results = await asyncio.gather(
            *(asyncio.wait_for(channel.send(event.message), self.timeout_seconds) for channel, event in sends),
            return_exceptions=True,
        )
        delivered = 0
        for (channel, event), result in zip(sends, results):
            if isinstance(result, BaseException):
                logger.error(
                    f"Failed to send {event.status.value} alert via {type(channel).__name__}: "
                    f"{type(result).__name__}: {result}"
                )
            else:
                delivered += 1
        logger.info(f"Dispatched {delivered}/{len(sends)} alert notification(s)")
        return delivered

    def schedule(self, events: Iterable[AlertEvent]) -> asyncio.Task:
        """Start dispatching in the background and return immediately."""
        task = asyncio.create_task(self.dispatch(list(events)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for background dispatches started with ``schedule``."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
