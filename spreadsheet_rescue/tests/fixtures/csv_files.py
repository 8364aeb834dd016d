TRANSACTIONS_HEADER = ["Customer Name", "Phone", "Bill No", "Amount", "Date", "Points"]

CSV_TRANSACTIONS = [
    TRANSACTIONS_HEADER,
    ["Asha Rao", "+91 98765 43210", "1001", "1200.50", "25/12/2023", "12"],
    ["Ravi", "12345", "1002", "300", "2023-01-05", "3"],
    ["", "", "", "", "", ""],
    ["Meena", "5123456789", "1003", "99", "03/04/2023", ""],
    ["Kiran", "9123456780", "1004", "450", "not a date", "5"],
    ["Asha R", "919876543210", "1005", "80", "2023-02-01 10:30:00", "1"],
]

CSV_TRANSACTIONS_NO_MOBILES = [
    TRANSACTIONS_HEADER,
    ["Ravi", "12345", "1002", "300", "2023-01-05", "3"],
    ["Meena", "5123456789", "1003", "99", "03/04/2023", ""],
]

CSV_HEADER_ONLY = [TRANSACTIONS_HEADER]

CSV_BLANK_ROWS = [
    TRANSACTIONS_HEADER,
    ["", "", "", "", "", ""],
    ["", "", "", "", "", ""],
]

CONTACTS_HEADER = [
    "Mobile",
    "Name",
    "Email",
    "Birthday",
    "Anniversary",
    "Gender",
    "Points",
    "Tags",
]

CSV_CONTACTS = [
    CONTACTS_HEADER,
    ["9876543210", "Asha Rao1!", " Asha@Example.COM ", "1990-05-17", "", "F", "10", "vip"],
    ["+91-9876543210", "Asha Again", "asha2@example.com", "", "", "F", "5", ""],
    ["8123456789", "O'Brien-Smith", "bad-email", "12/31/1985", "garbage", " M ", "", ""],
    ["4123456789", "Nope", "", "", "", "", "", ""],
    ["", "No Phone", "x@y.com", "", "", "", "", ""],
]

# One sheet holding both transaction and contact columns
COMBINED_HEADER = [
    "Bill Number",
    "Customer Name",
    "Mobile No",
    "Bill Amount",
    "Order Date",
    "Email Address",
    "DOB",
]

CSV_COMBINED = [
    COMBINED_HEADER,
    ["1", "Asha Rao", "9876543210", "100", "2024-01-02", "asha@example.com", "17/05/1990"],
    ["2", "Asha Rao", "09876543210", "250", "2024-01-03", "asha@example.com", ""],
    ["3", "Kiran", "7012345678", "75.5", "2024-01-04", "", "1988-11-02"],
    ["4", "Nobody", "", "10", "2024-01-05", "", ""],
]
