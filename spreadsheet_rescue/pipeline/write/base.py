import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import pendulum
import pyexcel

from spreadsheet_rescue.pipeline.models import OutputFile, OutputTable
from spreadsheet_rescue.utils import build_file_name

logger = logging.getLogger(__name__)


class BaseWriter(ABC):
    """Encodes an OutputTable (header row first) into file bytes."""

    @property
    @abstractmethod
    def file_type(self) -> str:
        pass

    @property
    @abstractmethod
    def media_type(self) -> str:
        pass

    def _save(self, array: list[list[Any]]) -> Any:
        stream = pyexcel.save_as(array=array, dest_file_type=self.file_type)
        content = stream.getvalue()
        if isinstance(content, str):
            content = content.encode("utf-8")
        return content

    @abstractmethod
    def encode(self, table: OutputTable) -> bytes:
        pass

    def write(
        self, table: OutputTable, purpose: str, now: Optional[pendulum.DateTime] = None
    ) -> OutputFile:
        file_name = build_file_name(purpose, self.file_type, now=now)
        content = self.encode(table)
        logger.info(f"Encoded {len(table)} rows into {file_name} ({len(content)} bytes)")
        return OutputFile(file_name=file_name, content=content, media_type=self.media_type)
