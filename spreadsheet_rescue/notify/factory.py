from typing import Type

from spreadsheet_rescue.notify.base import BaseNotifier
from spreadsheet_rescue.notify.log import LogNotifier
from spreadsheet_rescue.notify.webhook import WebhookNotifier
from spreadsheet_rescue.settings import config


class NotifierFactory:
    _notifiers: dict[str, Type[BaseNotifier]] = {
        "log": LogNotifier,
        "webhook": WebhookNotifier,
    }

    @classmethod
    def get_notifier(cls, notifier_type: str) -> Type[BaseNotifier]:
        try:
            return cls._notifiers[notifier_type]
        except KeyError:
            raise ValueError(
                f"Unsupported notifier: {notifier_type}. Supported notifiers: {list(cls._notifiers)}"
            )

    @classmethod
    def create_notifier(cls, notifier_type: str = None) -> BaseNotifier:
        return cls.get_notifier(notifier_type or config.NOTIFIER)()
