from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

import pendulum


class AlertLevel(Enum):
    INFO = "ℹ️"
    WARNING = "⚠️"
    ERROR = "❌"
    SUCCESS = "✅"


class BaseNotifier(ABC):
    def _create_message(
        self,
        level: AlertLevel,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        timestamp = pendulum.now("UTC").format("YYYY-MM-DD HH:mm:ss z")

        formatted_message = [
            f"{level.value} *{level.name}*",
            f"*{title}*",
            f"*Timestamp:* {timestamp}",
            f"*Message:* {message}",
        ]

        if details:
            formatted_message.append("\n*Details:*")
            formatted_message.extend(f"• *{key}:* {value}" for key, value in details.items())

        return "\n".join(formatted_message)

    @abstractmethod
    def notify(
        self,
        level: AlertLevel,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Deliver a user-facing message. Must not raise."""
        pass
