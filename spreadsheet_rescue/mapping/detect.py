"""Best-effort guesses of a contacts mapping from header text. Never used to decide validity."""

from typing import Any, Optional, Sequence

from spreadsheet_rescue.mapping.base import ContactsColumnMapping
from spreadsheet_rescue.mapping.columns import index_to_label
from spreadsheet_rescue.pipeline.normalize.text import cell_text

CONTACT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "mobile": ("mobile", "phone", "contact"),
    "name": ("name", "customer"),
    "email": ("email", "mail"),
    "birthday": ("birth", "dob"),
    "anniversary": ("anniv",),
    "gender": ("gender", "sex"),
    "points": ("point", "score"),
    "tags": ("tag", "category"),
}

# matched only on the whole header
CONTACT_EXACT_HEADERS: dict[str, tuple[str, ...]] = {
    "birthday": ("bday",),
}


def _match_end(field: str, header: str) -> int:
    """Where the last keyword for ``field`` ends in ``header``; 0 when none match."""
    if header in CONTACT_EXACT_HEADERS.get(field, ()):
        return len(header)
    ends = [
        header.rfind(keyword) + len(keyword)
        for keyword in CONTACT_KEYWORDS[field]
        if keyword in header
    ]
    return max(ends, default=0)


def _best_field(header: str) -> Optional[str]:
    """One field per header. The keyword nearest the end of the header wins,
    so "Contact Name" is a name and "Customer Mobile" is a mobile number."""
    scores = {field: _match_end(field, header) for field in CONTACT_KEYWORDS}
    best = max(scores, key=scores.get)
    return best if scores[best] else None


def detect_contacts_mapping(header_row: Sequence[Any]) -> ContactsColumnMapping:
    """Later matching columns overwrite earlier ones, so the right-most match wins."""
    labels = {field: "" for field in CONTACT_KEYWORDS}
    for index, cell in enumerate(header_row or ()):
        header = cell_text(cell).strip().lower()
        if not header:
            continue
        field = _best_field(header)
        if field:
            labels[field] = index_to_label(index)
    return ContactsColumnMapping(**labels)


def header_has_contact_columns(header_row: Sequence[Any]) -> bool:
    return bool(detect_contacts_mapping(header_row).mobile)
