import logging
from abc import ABC, abstractmethod
from typing import Any

from spreadsheet_rescue.exception.exceptions import (
    FileTooLargeError,
    NoDataInFileError,
    UnreadableFileError,
)
from spreadsheet_rescue.pipeline.normalize.text import is_empty_row
from spreadsheet_rescue.settings import config
from spreadsheet_rescue.utils import get_file_name, readable_file_size

logger = logging.getLogger(__name__)


class BaseReader(ABC):
    def __init__(self, content: bytes, source_filename: str):
        self.content: bytes = content
        self.source_filename: str = get_file_name(source_filename)
        self.max_file_size: int = config.MAX_FILE_SIZE_BYTES
        self.rows_read: int = 0

    @property
    @abstractmethod
    def file_type(self) -> str:
        pass

    @abstractmethod
    def _read_array(self) -> list[list[Any]]:
        """First sheet as returned by pyexcel, possibly ragged."""
        pass

    def _check_size(self) -> None:
        if len(self.content) > self.max_file_size:
            logger.error(f"File too large: {self.source_filename}")
            raise FileTooLargeError(
                error_values={
                    "source_filename": self.source_filename,
                    "file_size": readable_file_size(len(self.content)),
                    "max_file_size": readable_file_size(self.max_file_size),
                }
            )

    def _unreadable(self, e: Exception) -> UnreadableFileError:
        logger.error(f"Could not decode {self.file_type} file {self.source_filename}: {e}")
        return UnreadableFileError(
            error_values={
                "source_filename": self.source_filename,
                "reason": f"{type(e).__name__}: {e}",
            }
        )

    @staticmethod
    def _rectangular(array: list[list[Any]]) -> list[list[Any]]:
        width = max((len(row) for row in array), default=0)
        return [
            ["" if cell is None else cell for cell in row] + [""] * (width - len(row))
            for row in array
        ]

    def read(self) -> list[list[Any]]:
        """Decode the file into a RawGrid: header row first, missing cells as ''."""
        self._check_size()
        if not self.content:
            logger.error(f"Empty file: {self.source_filename}")
            raise NoDataInFileError(error_values={"source_filename": self.source_filename})

        grid = self._rectangular(self._read_array())
        data_rows = sum(1 for row in grid[1:] if not is_empty_row(row))
        if data_rows == 0:
            logger.error(f"No data rows found in file: {self.source_filename}")
            raise NoDataInFileError(error_values={"source_filename": self.source_filename})

        self.rows_read = data_rows
        logger.debug(
            f"Decoded {self.source_filename}: {len(grid)} rows x {len(grid[0])} columns"
        )
        return grid
