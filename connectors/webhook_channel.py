"""
Module: connectors.webhook_channel

Notification channel that posts alerts to a chat webhook (Slack/Telegram-bot
style ``{"text": ...}`` payload).
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class WebhookNotificationChannel:
    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client

    async def send(self, message: str) -> None:
        """POST the message; raises httpx errors for the dispatcher to log."""
        payload = {"text": f"*INVENTORY ALERT*\n{message}"}
        if self._client is not None:
            response = await self._client.post(self.webhook_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.webhook_url, json=payload, timeout=self.timeout)
                response.raise_for_status()
        logger.debug(f"Webhook alert delivered to {self.webhook_url} ({response.status_code})")
