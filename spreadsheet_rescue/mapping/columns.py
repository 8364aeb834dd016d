"""Spreadsheet column labels (A, B, ..., Z, AA, ...) to zero-based indices and back."""

_ALPHABET_SIZE = 26
_ORD_A = ord("A")

NOT_MAPPED = -1


def index_to_label(index: int) -> str:
    """0 -> 'A', 25 -> 'Z', 26 -> 'AA', 51 -> 'AZ', 52 -> 'BA'."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got: {index}")

    label = ""
    remaining = index
    while remaining >= 0:
        label = chr(remaining % _ALPHABET_SIZE + _ORD_A) + label
        remaining = remaining // _ALPHABET_SIZE - 1
    return label


def is_column_label(label: str) -> bool:
    return bool(label) and label.isascii() and label.isalpha()


def label_to_index(label: str) -> int:
    """Inverse of index_to_label, case-insensitive. Returns NOT_MAPPED for anything that is not a label."""
    if not isinstance(label, str):
        return NOT_MAPPED
    label = label.strip().upper()
    if not is_column_label(label):
        return NOT_MAPPED

    index = 0
    for char in label:
        index = index * _ALPHABET_SIZE + (ord(char) - _ORD_A + 1)
    return index - 1
