from abc import ABC, abstractmethod
from typing import Any


class BaseFileError(Exception, ABC):
    def __init__(self, error_values: dict[str, Any]):
        super().__init__(self._format(error_values))
        self.error_values: dict[str, Any] = error_values

    @property
    @abstractmethod
    def user_message(self) -> str:
        pass

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def _format(self, error_values: dict[str, Any]) -> str:
        try:
            return self.user_message.format(**error_values)
        except KeyError:
            return self.user_message
