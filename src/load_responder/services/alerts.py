from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import httpx

from load_responder.services.retry import RetryPolicy, with_retry

if TYPE_CHECKING:
    from load_responder.config import Settings

logger = logging.getLogger(__name__)


class AlertService:
    def __init__(self, settings: "Settings", *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.retry_policy = RetryPolicy.from_settings(settings)
        self._transport = transport

    async def notify(
        self,
        *,
        alert_type: str,
        summary: str,
        context: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        payload = {
            "event": "responder_alert",
            "alert_type": alert_type,
            "summary": summary,
            "context": context or {},
            "error": repr(error) if error else "",
            "env": self.settings.app_env,
            "raised_at": datetime.now(timezone.utc).isoformat(),
        }
        logger.error("Responder alert", extra=payload)

        if not self.settings.alert_webhook_url:
            return

        async def _post() -> httpx.Response:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                return await client.post(self.settings.alert_webhook_url, json=payload)

        try:
            await with_retry(
                operation="alert_webhook_post",
                call=_post,
                policy=self.retry_policy,
                logger=logger,
            )
        except Exception as exc:
            logger.error(
                "Failed to deliver alert webhook",
                extra={"event": "alert_webhook_delivery_failed", "error": repr(exc)},
            )
