from typing import Any, Optional

import pendulum
from pydantic import BaseModel, Field
from pydantic_extra_types.pendulum_dt import DateTime


class ProcessedFileRecord(BaseModel):
    """One successful transaction import, as stored by a history sink."""

    id: Optional[int] = None
    file_name: str
    original_file_name: str
    column_mapping: dict[str, Any]
    total_records: int
    valid_records: int
    rejected_records: int
    created_at: DateTime = Field(default_factory=lambda: pendulum.now("UTC"))
