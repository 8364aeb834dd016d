"""Free-form date parsing for spreadsheet cells.

Strategies are tried in order and the first one that produces a real calendar
date wins:

1. the explicit ``FORMAT_PATTERNS`` list (pendulum tokens),
2. generic free-form parsing (month-first),
3. bare ``D/M/Y`` numbers, month-first then day-first,
4. bare positive numbers as spreadsheet serial dates.

Ambiguous numeric dates are read month-first: ``03/04/2023`` is March 4th.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Optional

import pendulum

from spreadsheet_rescue.pipeline.normalize.text import cell_text

logger = logging.getLogger(__name__)

# Exact for serials above 60; Excel counts a 1900-02-29 that never existed
EXCEL_EPOCH = pendulum.datetime(1899, 12, 30)

DATE_FORMAT = "YYYY-MM-DD"
DATETIME_FORMAT = "YYYY-MM-DD HH:mm:ss"

FORMAT_PATTERNS = (
    # ISO, longest first
    "YYYY-MM-DD HH:mm:ss",
    "YYYY-MM-DD h:mm:ss A",
    "YYYY-MM-DD HH:mm",
    "YYYY-MM-DD h:mm A",
    "YYYY-MM-DD",
    # numeric, month-first before day-first
    "MM/DD/YYYY HH:mm:ss",
    "DD/MM/YYYY HH:mm:ss",
    "MM/DD/YYYY HH:mm",
    "DD/MM/YYYY HH:mm",
    "MM/DD/YYYY",
    "DD/MM/YYYY",
    "MM-DD-YYYY",
    "DD-MM-YYYY",
    "MM/DD/YY",
    "DD/MM/YY",
    "MM-DD-YY",
    "DD-MM-YY",
    # month names
    "MMMM DD YYYY HH:mm",
    "MMMM DD YYYY h:mm A",
    "MMM DD YYYY HH:mm",
    "MMM DD YYYY h:mm A",
    "DD MMMM YYYY",
    "DD MMM YYYY",
    "MMMM DD YYYY",
    "MMM DD YYYY",
    "DD-MMM-YYYY",
    "DD-MMM-YY",
)

_NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})$")
_SERIAL_RE = re.compile(r"^\d+(\.\d+)?$")
_YEAR_RE = re.compile(r"\d{4}")

# Same pivot as pendulum's YY token: 00-68 is 20xx, 69-99 is 19xx
TWO_DIGIT_YEAR_PIVOT = 68


def expand_year(year: int) -> int:
    if year >= 100:
        return year
    return 2000 + year if year <= TWO_DIGIT_YEAR_PIVOT else 1900 + year


def _clean(value: str) -> str:
    cleaned = re.sub(r"\s*\|\s*", " ", value.strip())
    cleaned = re.sub(r"[,،]", " ", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def _from_patterns(text: str) -> Optional[pendulum.DateTime]:
    for pattern in FORMAT_PATTERNS:
        try:
            parsed = pendulum.from_format(text, pattern, tz="UTC")
        except ValueError:
            continue
        # YYYY also matches one or two digits; leave those to the YY patterns
        if parsed.year < 100:
            continue
        return parsed
    return None


def _free_form(text: str) -> Optional[pendulum.DateTime]:
    # digit-only strings are left to the serial date strategy
    if _SERIAL_RE.match(text):
        return None
    # without an explicit year the parser fills the gaps from today
    if not _YEAR_RE.search(text):
        return None
    try:
        parsed = pendulum.parse(text, strict=False, day_first=False, tz="UTC")
    except (ValueError, OverflowError, TypeError):
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return None


def _numeric_date(text: str) -> Optional[pendulum.DateTime]:
    match = _NUMERIC_DATE_RE.match(text)
    if not match:
        return None

    first, second, year = match.groups()
    year = expand_year(int(year))
    for month, day in ((int(first), int(second)), (int(second), int(first))):
        try:
            return pendulum.datetime(year, month, day)
        except ValueError:
            continue
    return None


def from_serial(serial: float) -> Optional[pendulum.DateTime]:
    if serial <= 0:
        return None
    days = int(serial)
    fractional = serial - days
    try:
        dt = EXCEL_EPOCH.add(days=days)
    except (ValueError, OverflowError):
        return None
    if fractional > 0:
        dt = dt.add(seconds=int(round(fractional * 86400)))
    return dt


def parse_date(value: Any) -> Optional[pendulum.DateTime]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return pendulum.instance(value, tz="UTC")
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        return from_serial(float(value))

    text = _clean(cell_text(value))
    if not text:
        return None

    parsed = _from_patterns(text) or _free_form(text) or _numeric_date(text)
    if parsed is None and _SERIAL_RE.match(text):
        parsed = from_serial(float(text))

    if parsed is None:
        logger.debug(f"Could not parse date string: {value!r}")
    return parsed


def format_date(
    value: Any, fmt: str = DATE_FORMAT, return_original_on_error: bool = False
) -> str:
    """Formatted date, or '' (or the original text) when the value cannot be parsed."""
    if value is None or value == "":
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return cell_text(value) if return_original_on_error else ""
    return parsed.format(fmt)
