import pytest

from spreadsheet_rescue.mapping.columns import (
    NOT_MAPPED,
    index_to_label,
    is_column_label,
    label_to_index,
)


@pytest.mark.parametrize(
    "index, label",
    [(0, "A"), (25, "Z"), (26, "AA"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
)
def test_index_to_label_period_boundaries(index, label):
    assert index_to_label(index) == label
    assert label_to_index(label) == index


def test_label_round_trip_and_ordering():
    """Labels come out in spreadsheet order: by length, then alphabetically."""
    labels = [index_to_label(n) for n in range(2000)]
    for n, label in enumerate(labels):
        assert label_to_index(label) == n
    assert labels == sorted(labels, key=lambda label: (len(label), label))


def test_label_to_index_is_case_insensitive():
    assert label_to_index("c") == 2
    assert label_to_index(" ab ") == 27


@pytest.mark.parametrize("label", ["", "A1", "1", "Ä", "A-B", None])
def test_label_to_index_rejects_non_letters(label):
    assert label_to_index(label) == NOT_MAPPED


def test_index_to_label_rejects_negative_index():
    with pytest.raises(ValueError):
        index_to_label(-1)


def test_is_column_label():
    assert is_column_label("AB")
    assert not is_column_label("")
    assert not is_column_label("A B")
