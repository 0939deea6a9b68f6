from __future__ import annotations

import asyncio
import logging
from collections import deque

import httpx

from inventory.core.config import Settings
from inventory.core.metrics import NOTIFICATIONS
from inventory.domain.models import Notification, Severity
from inventory.domain.ports import NotifierPort

logger = logging.getLogger(__name__)

# Gotify priorities per toast severity
_GOTIFY_PRIORITY = {
    Severity.SUCCESS: 5,
    Severity.INFO: 3,
    Severity.ERROR: 8,
}


class NotificationService(NotifierPort):
    """
    Toast collaborator of the product store.
    Keeps a bounded history for the client and optionally forwards each toast to a webhook.
    """

    def __init__(self, http_client: httpx.AsyncClient | None, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings
        self._history: deque[Notification] = deque(maxlen=settings.notification_history_size)
        self._pending: set[asyncio.Task[None]] = set()

    def notify(self, message: str, severity: Severity) -> None:
        notification = Notification(message=message, severity=severity)
        self._history.append(notification)
        NOTIFICATIONS.labels(severity=severity.value).inc()
        self._schedule(notification)

    def recent(self, limit: int | None = None) -> list[Notification]:
        """Most recent notifications, oldest first."""
        items = list(self._history)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items

    def clear(self) -> None:
        self._history.clear()

    async def drain(self) -> None:
        """Waits for webhook deliveries still in flight."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _schedule(self, notification: Notification) -> None:
        if not self._settings.webhook_enabled or not self._settings.webhook_url:
            return
        if self._http_client is None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, webhook skipped for %r", notification.message)
            return

        # Fire and forget; _pending holds the task until it finishes
        task = loop.create_task(self._perform_send(notification))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _perform_send(self, notification: Notification) -> None:
        """Posts the toast to the configured webhook. Failures are logged, never raised."""
        url = self._settings.webhook_url
        if not url or self._http_client is None:
            return

        title = f"Inventory: {notification.severity.value}"
        try:
            if "ntfy.sh" in url:
                # ntfy style: POST {url} with text body and Title/Tags headers
                await self._http_client.post(
                    url,
                    content=notification.message,
                    headers={"Title": title, "Tags": notification.severity.value},
                    timeout=10.0,
                )
            else:
                # Gotify style (fallback): POST {url}/message with JSON body
                base_url = url.rstrip("/")
                await self._http_client.post(
                    f"{base_url}/message",
                    json={
                        "title": title,
                        "message": notification.message,
                        "priority": _GOTIFY_PRIORITY[notification.severity],
                    },
                    timeout=10.0,
                )
        except Exception:
            logger.exception("Failed to send notification to %s", url)
