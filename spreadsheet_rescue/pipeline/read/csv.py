import logging
from typing import Any

import pyexcel

from spreadsheet_rescue.pipeline.read.base import BaseReader
from spreadsheet_rescue.settings import config

logger = logging.getLogger(__name__)


class CSVReader(BaseReader):
    def __init__(self, content: bytes, source_filename: str, encoding: str = None):
        super().__init__(content, source_filename)
        self.encoding: str = encoding or config.CSV_ENCODING

    @property
    def file_type(self) -> str:
        return "csv"

    def _decode(self) -> str:
        try:
            return self.content.decode(self.encoding)
        except UnicodeDecodeError:
            logger.warning(
                f"{self.source_filename} is not valid {self.encoding}, falling back to latin-1"
            )
            return self.content.decode("latin-1")

    def _read_array(self) -> list[list[Any]]:
        text = self._decode()
        try:
            # keep every cell as text, "0987" must not become 987
            return pyexcel.get_array(
                file_content=text,
                file_type=self.file_type,
                auto_detect_int=False,
                auto_detect_float=False,
                auto_detect_datetime=False,
            )
        except Exception as e:
            raise self._unreadable(e) from e
