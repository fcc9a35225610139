"""
Module: connectors.dummy_notification_channel

Provides a dummy in-memory notification channel for testing alert delivery.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class DummyNotificationChannel:
    """
    Records every message it is asked to send.
    Set ``fail`` to make every send raise, to exercise failure handling.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: list[str] = []

    async def send(self, message: str) -> None:
        await asyncio.sleep(0.01)
        if self.fail:
            raise ConnectionError("Notification channel unavailable")
        self.messages.append(message)
        logger.info(f"[DummyNotificationChannel] Alert received: {message!r}")
