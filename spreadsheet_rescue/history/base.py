from abc import ABC, abstractmethod

import structlog

from spreadsheet_rescue.process.log import ProcessedFileRecord

logger = structlog.getLogger(__name__)


class BaseHistorySink(ABC):
    @abstractmethod
    def record(self, record: ProcessedFileRecord) -> None:
        pass


class NullHistorySink(BaseHistorySink):
    def record(self, record: ProcessedFileRecord) -> None:
        logger.debug(f"History disabled, not recording {record.file_name}")
