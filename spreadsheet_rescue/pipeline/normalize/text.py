import re
from datetime import date, datetime, time
from typing import Any

_NAME_DISALLOWED_RE = re.compile(r"[^\w\s'\-]|[\d_]")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_empty_cell(value: Any) -> bool:
    return value is None or value == ""


def is_empty_row(row: Any) -> bool:
    if not row:
        return True
    return all(is_empty_cell(cell) for cell in row)


def cell_text(value: Any) -> str:
    """Render a raw cell the way a spreadsheet shows it: 9876543210.0 -> '9876543210'."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def clean_text(value: Any) -> str:
    return cell_text(value).strip()


def clean_name(value: Any) -> str:
    """Keep letters, whitespace, apostrophes and hyphens only."""
    return _NAME_DISALLOWED_RE.sub("", clean_text(value)).strip()


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def normalize_email(value: Any) -> str:
    """Lower-cased address, or '' when it does not look like local@domain.tld."""
    email = clean_text(value).lower()
    if not is_valid_email(email):
        return ""
    return email
