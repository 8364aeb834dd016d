from typing import Type

from spreadsheet_rescue.exception.exceptions import UnsupportedFileTypeError
from spreadsheet_rescue.pipeline.read.base import BaseReader
from spreadsheet_rescue.pipeline.read.csv import CSVReader
from spreadsheet_rescue.pipeline.read.excel import ExcelReader
from spreadsheet_rescue.utils import get_file_extension, get_file_name


class ReaderFactory:
    _readers: dict[str, tuple[Type[BaseReader], dict]] = {
        ".csv": (CSVReader, {}),
        ".xlsx": (ExcelReader, {"file_type": "xlsx"}),
        ".xls": (ExcelReader, {"file_type": "xls"}),
    }

    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return list[str](cls._readers.keys())

    @classmethod
    def is_supported_file(cls, file_name: str) -> bool:
        return get_file_extension(file_name) in cls._readers

    @classmethod
    def create_reader(cls, file_name: str, content: bytes) -> BaseReader:
        extension = get_file_extension(file_name)
        try:
            reader_class, reader_kwargs = cls._readers[extension]
        except KeyError:
            raise UnsupportedFileTypeError(
                error_values={
                    "source_filename": get_file_name(file_name),
                    "extension": extension or "(none)",
                    "supported_extensions": ", ".join(cls.get_supported_extensions()),
                }
            )
        return reader_class(content=content, source_filename=file_name, **reader_kwargs)


def read_raw_grid(file_name: str, content: bytes) -> list[list]:
    return ReaderFactory.create_reader(file_name, content).read()


def is_supported_file(file_name: str) -> bool:
    return ReaderFactory.is_supported_file(file_name)
