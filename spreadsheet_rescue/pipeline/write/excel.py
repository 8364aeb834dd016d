from spreadsheet_rescue.pipeline.models import OutputTable
from spreadsheet_rescue.pipeline.write.base import BaseWriter


class ExcelWriter(BaseWriter):
    @property
    def file_type(self) -> str:
        return "xlsx"

    @property
    def media_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def encode(self, table: OutputTable) -> bytes:
        # single sheet, header row first; cells are written as text
        return self._save([[str(cell) for cell in row] for row in table.to_array()])
