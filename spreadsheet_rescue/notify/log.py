from typing import Any, Dict, Optional

import structlog

from spreadsheet_rescue.notify.base import AlertLevel, BaseNotifier

logger = structlog.getLogger(__name__)

_LOG_METHODS = {
    AlertLevel.INFO: "info",
    AlertLevel.SUCCESS: "info",
    AlertLevel.WARNING: "warning",
    AlertLevel.ERROR: "error",
}


class LogNotifier(BaseNotifier):
    """Writes notifications to the application log."""

    def notify(
        self,
        level: AlertLevel,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        log = getattr(logger, _LOG_METHODS[level])
        log(f"{title}: {message}", alert_level=level.name, **(details or {}))
