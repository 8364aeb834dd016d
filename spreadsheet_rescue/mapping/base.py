from collections import Counter
from typing import Any, ClassVar, Dict

from pydantic import BaseModel, ConfigDict, field_validator

from spreadsheet_rescue.exception.exceptions import InvalidColumnMappingError
from spreadsheet_rescue.mapping.columns import (
    NOT_MAPPED,
    is_column_label,
    label_to_index,
)


class ColumnMapping(BaseModel):
    """Canonical field name -> spreadsheet column label ('' when not mapped)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def normalize_label(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip().upper()

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields.keys())

    @classmethod
    def from_labels(cls, strict: bool = False, **labels: Any) -> "ColumnMapping":
        mapping = cls(**labels)
        if strict:
            mapping.validate_complete()
        return mapping

    def column_indices(self) -> Dict[str, int]:
        return {
            name: label_to_index(label) if label else NOT_MAPPED
            for name, label in self.model_dump().items()
        }

    def mapped_fields(self) -> Dict[str, str]:
        return {name: label for name, label in self.model_dump().items() if label}

    def validate_complete(self) -> None:
        labels = self.mapped_fields()

        missing = [name for name in self.REQUIRED_FIELDS if name not in labels]
        if missing:
            raise InvalidColumnMappingError(
                f"Missing column for required fields: {', '.join(missing)}"
            )

        invalid = {name: label for name, label in labels.items() if not is_column_label(label)}
        if invalid:
            details = ", ".join(f"{name}={label!r}" for name, label in invalid.items())
            raise InvalidColumnMappingError(
                f"Invalid column letters (expected A-Z, AA, AB, ...): {details}"
            )

        counts = Counter(labels.values())
        duplicated = sorted(label for label, count in counts.items() if count > 1)
        if duplicated:
            raise InvalidColumnMappingError(
                f"Columns mapped to more than one field: {', '.join(duplicated)}"
            )


class TransactionColumnMapping(ColumnMapping):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "mobile",
        "bill_number",
        "bill_amount",
        "order_time",
    )

    mobile: str = ""
    bill_number: str = ""
    bill_amount: str = ""
    order_time: str = ""
    points_earned: str = ""
    points_redeemed: str = ""


class ContactsColumnMapping(ColumnMapping):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("mobile",)

    mobile: str = ""
    name: str = ""
    email: str = ""
    birthday: str = ""
    anniversary: str = ""
    gender: str = ""
    points: str = ""
    tags: str = ""
