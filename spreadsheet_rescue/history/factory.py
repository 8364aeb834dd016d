from spreadsheet_rescue.history.base import BaseHistorySink, NullHistorySink
from spreadsheet_rescue.history.database import DatabaseHistorySink
from spreadsheet_rescue.settings import config


class HistorySinkFactory:
    @classmethod
    def create_sink(cls, enabled: bool = None) -> BaseHistorySink:
        enabled = config.HISTORY_ENABLED if enabled is None else enabled
        if not enabled:
            return NullHistorySink()
        return DatabaseHistorySink()
