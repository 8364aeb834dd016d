from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Sequence

import structlog

from spreadsheet_rescue.mapping.base import ColumnMapping
from spreadsheet_rescue.pipeline.models import (
    REJECTION_REASON_HEADER,
    OutputTable,
    PipelineResult,
    ProcessingStats,
)
from spreadsheet_rescue.pipeline.normalize.phone import (
    MISSING_MOBILE_COLUMN,
    mobile_rejection_reason,
    normalize_phone,
)
from spreadsheet_rescue.pipeline.normalize.text import is_empty_row

logger = structlog.getLogger(__name__)

RawGrid = Sequence[Sequence[Any]]


class BaseRowProcessor(ABC):
    """Maps, normalizes and partitions the data rows of a RawGrid.

    Row 0 is the header and is never processed. Rows without a single
    non-empty cell are skipped and never reach either output table; every
    other row ends up in exactly one of them.
    """

    HEADERS: ClassVar[list[str]]
    PURPOSE: ClassVar[str]

    def __init__(self, mapping: ColumnMapping):
        self.mapping: ColumnMapping = mapping
        self.column_indices: dict[str, int] = mapping.column_indices()
        self.valid_table: OutputTable = OutputTable(headers=list(self.HEADERS))
        self.rejected_table: OutputTable = OutputTable(
            headers=[*self.HEADERS, REJECTION_REASON_HEADER]
        )
        self.valid_records: int = 0
        self.rejected_records: int = 0
        self.empty_rows_skipped: int = 0

    def _is_mapped(self, row: Sequence[Any], field: str) -> bool:
        index = self.column_indices.get(field, -1)
        return 0 <= index < len(row)

    def _cell(self, row: Sequence[Any], field: str) -> Any:
        if not self._is_mapped(row, field):
            return None
        return row[self.column_indices[field]]

    def _mobile(self, row: Sequence[Any]) -> tuple[str, Optional[str]]:
        """Normalized mobile number and the reason it is rejected, if any."""
        if not self._is_mapped(row, "mobile"):
            return "", MISSING_MOBILE_COLUMN
        mobile = normalize_phone(self._cell(row, "mobile"))
        return mobile, mobile_rejection_reason(mobile)

    @abstractmethod
    def _build_record(
        self, row: Sequence[Any], row_number: int
    ) -> tuple[list[str], Optional[str]]:
        """Output record in HEADERS order and its rejection reason (None when valid)."""
        pass

    def _accept(self, record: list[str]) -> None:
        self.valid_table.rows.append(record)
        self.valid_records += 1

    def _reject(self, record: list[str], reason: str) -> None:
        self.rejected_table.rows.append([*record, reason])
        self.rejected_records += 1

    def _finalize(self) -> None:
        pass

    @abstractmethod
    def _stats(self) -> ProcessingStats:
        pass

    def _result(self) -> PipelineResult:
        return PipelineResult(
            valid_table=self.valid_table,
            rejected_table=self.rejected_table,
            stats=self._stats(),
        )

    def process(self, raw_grid: RawGrid) -> PipelineResult:
        logger.info(
            f"Processing {max(len(raw_grid) - 1, 0)} {self.PURPOSE} rows",
            column_indices=self.column_indices,
        )
        for row_number in range(1, len(raw_grid)):
            row = raw_grid[row_number]
            if is_empty_row(row):
                self.empty_rows_skipped += 1
                continue

            record, reason = self._build_record(row, row_number)
            if reason:
                self._reject(record, reason)
            else:
                self._accept(record)

        self._finalize()
        result = self._result()
        logger.info(
            f"{self.PURPOSE.capitalize()} rows processed: {result.stats.valid_records} valid, "
            f"{result.stats.rejected_records} rejected, {self.empty_rows_skipped} empty rows skipped"
        )
        return result
