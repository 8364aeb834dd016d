from spreadsheet_rescue.mapping.base import ContactsColumnMapping
from spreadsheet_rescue.pipeline.models import CONTACTS_HEADERS, REJECTION_REASON_HEADER
from spreadsheet_rescue.pipeline.normalize.phone import BAD_LEADING_DIGIT, MISSING_MOBILE
from spreadsheet_rescue.pipeline.process.contacts import (
    DUPLICATE_MOBILE,
    process_contacts,
)
from spreadsheet_rescue.tests.fixtures.csv_files import CSV_CONTACTS


def test_contacts_stats(contacts_mapping):
    result = process_contacts(CSV_CONTACTS, contacts_mapping)

    stats = result.stats
    assert stats.valid_records == 2
    assert stats.rejected_records == 2
    assert stats.duplicate_records == 1
    assert stats.total_records == 5
    assert len(result.rejected_table) == stats.rejected_records + stats.duplicate_records


def test_contacts_valid_rows_are_normalized(contacts_mapping):
    result = process_contacts(CSV_CONTACTS, contacts_mapping)

    assert result.valid_table.headers == CONTACTS_HEADERS
    assert result.valid_table.rows == [
        ["9876543210", "Asha Rao", "asha@example.com", "1990-05-17", "", "F", "10", "vip"],
        ["8123456789", "O'Brien-Smith", "", "1985-12-31", "", "M", "", ""],
    ]


def test_contacts_duplicates_first_seen_wins(contacts_mapping):
    """'9876543210' and '+91-9876543210' are the same number; the first row is kept."""
    result = process_contacts(CSV_CONTACTS, contacts_mapping)

    mobiles = result.valid_table.column("mobile")
    assert len(mobiles) == len(set(mobiles))
    assert result.valid_table.rows[0][1] == "Asha Rao"

    duplicates = [row for row in result.rejected_table.rows if row[-1] == DUPLICATE_MOBILE]
    assert len(duplicates) == 1
    assert duplicates[0][:2] == ["9876543210", "Asha Again"]


def test_contacts_rejection_reasons(contacts_mapping):
    result = process_contacts(CSV_CONTACTS, contacts_mapping)
    assert sorted(result.rejected_table.column(REJECTION_REASON_HEADER)) == sorted(
        [DUPLICATE_MOBILE, BAD_LEADING_DIGIT, MISSING_MOBILE]
    )


def test_valid_table_follows_first_seen_order():
    grid = [
        ["Mobile", "Name"],
        ["7000000001", "First"],
        ["7000000002", "Second"],
        ["917000000001", "First again"],
        ["7000000003", "Third"],
    ]
    result = process_contacts(grid, ContactsColumnMapping(mobile="A", name="B"))
    assert result.valid_table.column("name") == ["First", "Second", "Third"]
    assert result.stats.duplicate_records == 1


def test_mobile_only_mapping():
    grid = [["Mobile"], ["9876543210"], [""], ["8123456789"]]
    result = process_contacts(grid, ContactsColumnMapping(mobile="A"))
    assert result.valid_table.rows == [
        ["9876543210", "", "", "", "", "", "", ""],
        ["8123456789", "", "", "", "", "", "", ""],
    ]
    assert result.stats.total_records == 2


def test_two_digit_year_birthdays():
    grid = [["Mobile", "Birthday"], ["9876543210", "17-May-90"], ["8123456789", "1st"]]
    result = process_contacts(grid, ContactsColumnMapping(mobile="A", birthday="B"))
    assert result.valid_table.column("birthday") == ["1990-05-17", ""]
