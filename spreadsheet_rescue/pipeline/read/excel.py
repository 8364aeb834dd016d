import logging
from typing import Any

import pyexcel

from spreadsheet_rescue.pipeline.read.base import BaseReader

logger = logging.getLogger(__name__)


class ExcelReader(BaseReader):
    """First sheet of an .xlsx/.xls workbook. Date cells arrive as datetime objects."""

    def __init__(self, content: bytes, source_filename: str, file_type: str = "xlsx"):
        super().__init__(content, source_filename)
        self._file_type: str = file_type

    @property
    def file_type(self) -> str:
        return self._file_type

    def _read_array(self) -> list[list[Any]]:
        try:
            return pyexcel.get_array(file_content=self.content, file_type=self.file_type)
        except Exception as e:
            raise self._unreadable(e) from e
