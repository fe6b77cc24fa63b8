import pytest

from landrecords.conversions import (
    clean_uuid,
    convert_spreadsheet_date,
    is_iso_date,
    is_valid_mobile,
    normalize_gender,
    to_bool,
    to_int,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-03-05", "2024-03-05"),
        ("1942", "1942-01-01"),
        (45000, "2023-03-15"),
        ("45000", "2023-03-15"),
        ("March 5, 2021", "2021-03-05"),
        ("March 2020", "2020-03-01"),
        ("2020-02-30", "1990-01-01"),
        ("definitely not a date", "1990-01-01"),
        ("Not found", None),
        ("", None),
        (None, None),
    ],
)
def test_convert_spreadsheet_date(value, expected) -> None:
    assert convert_spreadsheet_date(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("male", "MALE"),
        ("M", "MALE"),
        ("Woman", "FEMALE"),
        ("femal", "FEMALE"),
        (" f ", "FEMALE"),
        ("unknown", "MALE"),
        (None, "MALE"),
    ],
)
def test_normalize_gender(value, expected) -> None:
    assert normalize_gender(value) == expected


def test_clean_uuid_drops_placeholders_and_garbage() -> None:
    valid = "8a7b6c5d-4e3f-4a1b-8c2d-9e0f1a2b3c4d"

    assert clean_uuid(f" {valid} ") == valid
    assert clean_uuid("PASTE UUID HERE") is None
    assert clean_uuid("sub district (optional)") is None
    assert clean_uuid("district-7") is None
    assert clean_uuid(None) is None


def test_mobile_pattern() -> None:
    assert is_valid_mobile("+252-612-345-678")
    assert is_valid_mobile("+252612345678")
    assert not is_valid_mobile("612345678")
    assert not is_valid_mobile("+252 612 345 678")


def test_iso_date_rejects_impossible_dates() -> None:
    assert is_iso_date("2024-02-29")
    assert not is_iso_date("2023-02-29")
    assert not is_iso_date("31/12/2025")


def test_numeric_helpers() -> None:
    assert to_int("3.0") == 3
    assert to_int("3.5") is None
    assert to_int(True) is None
    assert to_bool("yes", default=False) is True
    assert to_bool("", default=True) is True
    assert to_bool("no", default=True) is False
