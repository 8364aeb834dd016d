"""Field checks that are reported as warnings. None of these reject a row."""

import re
from typing import Any, Callable, Optional

from spreadsheet_rescue.pipeline.normalize.dates import parse_date
from spreadsheet_rescue.pipeline.normalize.text import clean_text

_WHOLE_NUMBER_RE = re.compile(r"^\d+$")
_DECIMAL_RE = re.compile(r"^\d+(\.\d+)?$")


def check_bill_number(value: Any) -> Optional[str]:
    text = clean_text(value)
    if text and not _WHOLE_NUMBER_RE.match(text):
        return "Bill number must be numeric"
    return None


def check_bill_amount(value: Any) -> Optional[str]:
    text = clean_text(value)
    if text and not _DECIMAL_RE.match(text):
        return "Bill amount must be a number"
    return None


def check_points(value: Any) -> Optional[str]:
    text = clean_text(value)
    if text and not _DECIMAL_RE.match(text):
        return "Points must be a number"
    return None


def check_date(value: Any) -> Optional[str]:
    if clean_text(value) and parse_date(value) is None:
        return "Invalid date format"
    return None


TRANSACTION_FIELD_CHECKS: dict[str, Callable[[Any], Optional[str]]] = {
    "bill_number": check_bill_number,
    "bill_amount": check_bill_amount,
    "order_time": check_date,
    "points_earned": check_points,
    "points_redeemed": check_points,
}
