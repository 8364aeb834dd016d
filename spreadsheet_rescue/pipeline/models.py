from typing import Any, Optional

from pydantic import BaseModel, Field

REJECTION_REASON_HEADER = "rejection_reason"

TRANSACTION_HEADERS = [
    "mobile",
    "txn_type",
    "bill_number",
    "bill_amount",
    "order_time",
    "points_earned",
    "points_redeemed",
]

CONTACTS_HEADERS = [
    "mobile",
    "name",
    "email",
    "birthday",
    "anniversary",
    "gender",
    "points",
    "tags",
]


class OutputTable(BaseModel):
    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    def to_array(self) -> list[list[Any]]:
        return [list(self.headers), *[list(row) for row in self.rows]]

    def column(self, name: str) -> list[str]:
        index = self.headers.index(name)
        return [row[index] for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


class ProcessingStats(BaseModel):
    total_records: int = 0
    valid_records: int = 0
    rejected_records: int = 0
    duplicate_records: Optional[int] = None


class PipelineResult(BaseModel):
    valid_table: OutputTable
    rejected_table: OutputTable
    stats: ProcessingStats
    has_contact_data: bool = False
    field_warnings: dict[str, int] = Field(default_factory=dict)


class OutputFile(BaseModel):
    file_name: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class RunResult(BaseModel):
    """Pipeline result plus its encoded valid and rejected files."""

    result: PipelineResult
    valid_file: OutputFile
    rejected_file: OutputFile
    raw_grid: list[list[Any]] = Field(default_factory=list)

    @property
    def files(self) -> list[OutputFile]:
        return [self.valid_file, self.rejected_file]
