import pytest

from spreadsheet_rescue.pipeline.normalize.advisory import (
    check_bill_amount,
    check_bill_number,
    check_date,
    check_points,
)
from spreadsheet_rescue.pipeline.normalize.numeric import coerce_number
from spreadsheet_rescue.pipeline.normalize.phone import (
    BAD_LEADING_DIGIT,
    MISSING_MOBILE,
    SHORT_MOBILE,
    is_valid_mobile,
    mobile_rejection_reason,
    normalize_phone,
)
from spreadsheet_rescue.pipeline.normalize.text import (
    cell_text,
    clean_name,
    clean_text,
    is_empty_row,
    normalize_email,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("+91 98765 43210", "9876543210"),
        ("919876543210", "9876543210"),
        ("+91-9876543210", "9876543210"),
        ("09876543210", "9876543210"),
        ("(987) 654-3210", "9876543210"),
        (9876543210, "9876543210"),
        (9876543210.0, "9876543210"),
        ("12345", "12345"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_normalize_phone_is_idempotent():
    assert normalize_phone(normalize_phone("+91 98765 43210")) == "9876543210"
    assert normalize_phone("9876543210") == "9876543210"


def test_country_prefix_only_dropped_when_too_long():
    # exactly 10 digits starting with 91 is a real number
    assert normalize_phone("9123456780") == "9123456780"


@pytest.mark.parametrize(
    "mobile, reason",
    [
        ("9876543210", None),
        ("6000000000", None),
        ("", MISSING_MOBILE),
        ("12345", SHORT_MOBILE),
        ("5123456789", BAD_LEADING_DIGIT),
        ("0123456789", BAD_LEADING_DIGIT),
    ],
)
def test_mobile_rejection_reason(mobile, reason):
    assert mobile_rejection_reason(mobile) == reason
    assert is_valid_mobile(mobile) is (reason is None)


def test_reason_texts():
    assert SHORT_MOBILE == "Mobile number has fewer than 10 digits"
    assert BAD_LEADING_DIGIT == "Mobile number starts with digit 5 or lower"


def test_clean_text_and_cell_text():
    assert clean_text("  Gold  ") == "Gold"
    assert clean_text(None) == ""
    assert cell_text(1200.5) == "1200.5"
    assert cell_text(1001.0) == "1001"
    assert cell_text(True) == "TRUE"


def test_clean_name_keeps_letters_apostrophes_and_hyphens():
    assert clean_name(" O'Brien-Smith ") == "O'Brien-Smith"
    assert clean_name("Asha Rao1!") == "Asha Rao"
    assert clean_name("José_42") == "José"
    assert clean_name(None) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        (" Asha@Example.COM ", "asha@example.com"),
        ("a.b@mail.co.in", "a.b@mail.co.in"),
        ("bad-email", ""),
        ("no@tld", ""),
        ("two words@x.com", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_email(raw, expected):
    assert normalize_email(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (42, 42),
        (3.5, 3.5),
        ("₹ 1,250.50", 1250.5),
        ("-12", -12.0),
        ("abc", ""),
        ("", ""),
        (None, ""),
        (True, ""),
    ],
)
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


def test_is_empty_row():
    assert is_empty_row([])
    assert is_empty_row(["", None, ""])
    assert not is_empty_row(["", 0, ""])


def test_advisory_checks_only_warn():
    assert check_bill_number("1001") is None
    assert check_bill_number("B-1") == "Bill number must be numeric"
    assert check_bill_amount("12.50") is None
    assert check_bill_amount("12,50") == "Bill amount must be a number"
    assert check_points("") is None
    assert check_points("ten") == "Points must be a number"
    assert check_date("2024-01-05") is None
    assert check_date("yesterday-ish") == "Invalid date format"
