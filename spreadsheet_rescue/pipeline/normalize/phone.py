import re
from typing import Any, Optional

from spreadsheet_rescue.pipeline.normalize.text import cell_text

MOBILE_LENGTH = 10
COUNTRY_PREFIX = "91"
VALID_LEADING_DIGITS = "6789"

MISSING_MOBILE = "Missing mobile number"
MISSING_MOBILE_COLUMN = "Missing mobile number column"
SHORT_MOBILE = "Mobile number has fewer than 10 digits"
BAD_LEADING_DIGIT = "Mobile number starts with digit 5 or lower"

_NON_DIGIT_RE = re.compile(r"\D")


def normalize_phone(value: Any) -> str:
    """'+91 98765 43210' -> '9876543210'. Short numbers are passed through for the validator."""
    digits = _NON_DIGIT_RE.sub("", cell_text(value))

    if digits.startswith(COUNTRY_PREFIX) and len(digits) > MOBILE_LENGTH:
        digits = digits[len(COUNTRY_PREFIX) :]

    if len(digits) > MOBILE_LENGTH:
        digits = digits[-MOBILE_LENGTH:]

    return digits


def mobile_rejection_reason(mobile: str) -> Optional[str]:
    """Reason a normalized mobile number is not acceptable, or None when it is."""
    if not mobile:
        return MISSING_MOBILE
    if len(mobile) < MOBILE_LENGTH:
        return SHORT_MOBILE
    if mobile[0] not in VALID_LEADING_DIGITS:
        return BAD_LEADING_DIGIT
    return None


def is_valid_mobile(mobile: str) -> bool:
    return mobile_rejection_reason(mobile) is None
