from typing import Any, ClassVar, Optional, Sequence

import structlog

from spreadsheet_rescue.mapping.base import ContactsColumnMapping
from spreadsheet_rescue.pipeline.models import (
    CONTACTS_HEADERS,
    PipelineResult,
    ProcessingStats,
)
from spreadsheet_rescue.pipeline.normalize.dates import DATE_FORMAT, format_date
from spreadsheet_rescue.pipeline.normalize.text import (
    clean_name,
    clean_text,
    normalize_email,
)
from spreadsheet_rescue.pipeline.process.base import BaseRowProcessor

logger = structlog.getLogger(__name__)

DUPLICATE_MOBILE = "Duplicate mobile number"


class ContactsProcessor(BaseRowProcessor):
    """Contacts keyed by mobile number. The first row seen for a number wins."""

    HEADERS: ClassVar[list[str]] = CONTACTS_HEADERS
    PURPOSE: ClassVar[str] = "contacts"

    def __init__(self, mapping: ContactsColumnMapping, date_format: str = DATE_FORMAT):
        super().__init__(mapping)
        self.date_format: str = date_format
        self.unique_contacts: dict[str, list[str]] = {}
        self.duplicate_records: int = 0

    def _date(self, row: Sequence[Any], field: str) -> str:
        raw = clean_text(self._cell(row, field))
        if not raw:
            return ""
        return format_date(raw, self.date_format)

    def _build_record(
        self, row: Sequence[Any], row_number: int
    ) -> tuple[list[str], Optional[str]]:
        mobile, reason = self._mobile(row)
        record = [
            mobile,
            clean_name(self._cell(row, "name")),
            normalize_email(self._cell(row, "email")),
            self._date(row, "birthday"),
            self._date(row, "anniversary"),
            clean_text(self._cell(row, "gender")),
            clean_text(self._cell(row, "points")),
            clean_text(self._cell(row, "tags")),
        ]
        return record, reason

    def _accept(self, record: list[str]) -> None:
        mobile = record[0]
        if mobile in self.unique_contacts:
            self.rejected_table.rows.append([*record, DUPLICATE_MOBILE])
            self.duplicate_records += 1
            return
        self.unique_contacts[mobile] = record
        self.valid_records += 1

    def _finalize(self) -> None:
        self.valid_table.rows.extend(self.unique_contacts.values())
        logger.debug(
            f"{len(self.unique_contacts)} unique mobile numbers, "
            f"{self.duplicate_records} duplicates"
        )

    def _stats(self) -> ProcessingStats:
        return ProcessingStats(
            total_records=self.valid_records
            + self.rejected_records
            + self.duplicate_records,
            valid_records=self.valid_records,
            rejected_records=self.rejected_records,
            duplicate_records=self.duplicate_records,
        )


def process_contacts(
    raw_grid: Sequence[Sequence[Any]],
    mapping: ContactsColumnMapping,
    date_format: str = DATE_FORMAT,
) -> PipelineResult:
    return ContactsProcessor(mapping, date_format).process(raw_grid)
