from typing import Type

from spreadsheet_rescue.pipeline.write.base import BaseWriter
from spreadsheet_rescue.pipeline.write.csv import CSVWriter
from spreadsheet_rescue.pipeline.write.excel import ExcelWriter
from spreadsheet_rescue.settings import config


class WriterFactory:
    _writers: dict[str, Type[BaseWriter]] = {
        "csv": CSVWriter,
        "xlsx": ExcelWriter,
    }

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        return list[str](cls._writers.keys())

    @classmethod
    def create_writer(cls, output_format: str = None) -> BaseWriter:
        output_format = (output_format or config.OUTPUT_FORMAT).lower().lstrip(".")
        try:
            writer_class = cls._writers[output_format]
        except KeyError:
            raise ValueError(
                f"Unsupported output format: {output_format}. Supported formats: {cls.get_supported_formats()}"
            )
        return writer_class()
