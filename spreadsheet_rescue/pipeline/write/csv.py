from spreadsheet_rescue.pipeline.models import OutputTable
from spreadsheet_rescue.pipeline.write.base import BaseWriter


class CSVWriter(BaseWriter):
    @property
    def file_type(self) -> str:
        return "csv"

    @property
    def media_type(self) -> str:
        return "text/csv"

    def encode(self, table: OutputTable) -> bytes:
        return self._save(table.to_array())
