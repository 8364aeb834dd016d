from collections import Counter
from typing import Any, ClassVar, Optional, Sequence

import structlog

from spreadsheet_rescue.mapping.base import TransactionColumnMapping
from spreadsheet_rescue.pipeline.models import (
    TRANSACTION_HEADERS,
    PipelineResult,
    ProcessingStats,
)
from spreadsheet_rescue.pipeline.normalize.advisory import TRANSACTION_FIELD_CHECKS
from spreadsheet_rescue.pipeline.normalize.dates import DATETIME_FORMAT, format_date
from spreadsheet_rescue.pipeline.normalize.text import clean_text
from spreadsheet_rescue.pipeline.process.base import BaseRowProcessor

logger = structlog.getLogger(__name__)

TXN_TYPE = "purchase"


class TransactionProcessor(BaseRowProcessor):
    HEADERS: ClassVar[list[str]] = TRANSACTION_HEADERS
    PURPOSE: ClassVar[str] = "transaction"

    def __init__(
        self,
        mapping: TransactionColumnMapping,
        order_time_format: str = DATETIME_FORMAT,
    ):
        super().__init__(mapping)
        self.order_time_format: str = order_time_format
        self.field_warnings: Counter = Counter()
        self.sample_warnings: list[str] = []

    def _text(self, row: Sequence[Any], field: str) -> str:
        return clean_text(self._cell(row, field))

    def _check_fields(self, row: Sequence[Any], row_number: int) -> None:
        for field, check in TRANSACTION_FIELD_CHECKS.items():
            if not self._is_mapped(row, field):
                continue
            warning = check(self._cell(row, field))
            if warning:
                self.field_warnings[field] += 1
                # Collect sample warnings (first 5)
                if len(self.sample_warnings) < 5:
                    self.sample_warnings.append(f"Row {row_number + 1}: {warning}")

    def _build_record(
        self, row: Sequence[Any], row_number: int
    ) -> tuple[list[str], Optional[str]]:
        mobile, reason = self._mobile(row)

        order_time = ""
        if self._is_mapped(row, "order_time"):
            order_time = format_date(
                self._cell(row, "order_time"),
                self.order_time_format,
                return_original_on_error=True,
            )

        self._check_fields(row, row_number)

        record = [
            mobile,
            TXN_TYPE,
            self._text(row, "bill_number"),
            self._text(row, "bill_amount"),
            order_time,
            self._text(row, "points_earned"),
            self._text(row, "points_redeemed"),
        ]
        return record, reason

    def _stats(self) -> ProcessingStats:
        return ProcessingStats(
            total_records=self.valid_records + self.rejected_records,
            valid_records=self.valid_records,
            rejected_records=self.rejected_records,
        )

    def _result(self) -> PipelineResult:
        result = super()._result()
        result.has_contact_data = any(row[0] for row in self.valid_table.rows)
        result.field_warnings = dict(self.field_warnings)
        if self.sample_warnings:
            logger.warning(
                f"Field warnings in {sum(self.field_warnings.values())} cells: "
                + "; ".join(self.sample_warnings)
            )
        return result


def process_transactions(
    raw_grid: Sequence[Sequence[Any]],
    mapping: TransactionColumnMapping,
    order_time_format: str = DATETIME_FORMAT,
) -> PipelineResult:
    return TransactionProcessor(mapping, order_time_format).process(raw_grid)
