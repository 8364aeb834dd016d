import logging
from typing import Any, Dict, Optional

import httpx
import pendulum

from spreadsheet_rescue.notify.base import AlertLevel, BaseNotifier
from spreadsheet_rescue.settings import config
from spreadsheet_rescue.utils import retry

logger = logging.getLogger(__name__)


class WebhookNotifier(BaseNotifier):
    """Posts notifications as JSON to a generic webhook (Slack, MS Teams, etc.)."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10.0):
        self.webhook_url = webhook_url or config.WEBHOOK_URL
        self.timeout = timeout

    def _create_payload(
        self,
        level: AlertLevel,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload = {
            "text": self._create_message(level, title, message, details),
            "title": title,
            "timestamp": pendulum.now("UTC").format("YYYY-MM-DD HH:mm:ss z"),
            "level": level.name,
        }
        if details:
            payload["details"] = details
        return payload

    @retry()
    def _send_webhook(self, payload: Dict[str, Any]) -> None:
        response = httpx.post(self.webhook_url, json=payload, timeout=self.timeout)
        if response.status_code == 200:
            logger.info("Sent webhook notification successfully")
        else:
            raise Exception(
                f"Webhook returned status {response.status_code}: {response.text}"
            )

    def notify(
        self,
        level: AlertLevel,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not self.webhook_url:
            logger.warning("WEBHOOK_URL not configured, skipping webhook notification")
            return

        try:
            self._send_webhook(self._create_payload(level, title, message, details))
        except Exception as e:
            logger.exception(f"Failed to send webhook notification after retries: {e}")
