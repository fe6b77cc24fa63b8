from landrecords.columns import ALIASES, field_value, has_column, is_blank, resolve, text_value


def test_exact_alias_priority_follows_alias_order() -> None:
    row = {"Property ID": "from-label", "property_id": "from-key"}

    assert resolve(row, ALIASES["property_id"]) == "from-key"


def test_case_insensitive_trimmed_match_when_no_exact_key() -> None:
    row = {"  full NAME ": "Ada Lovelace"}

    assert field_value(row, "full_name") == "Ada Lovelace"


def test_empty_values_fall_through_to_next_alias() -> None:
    row = {"full_name": "", "Full Name": None, "Name": "Ada"}

    assert field_value(row, "full_name") == "Ada"


def test_resolve_returns_none_when_nothing_matches() -> None:
    assert field_value({"unrelated": "x"}, "email") is None


def test_resolve_is_idempotent_and_leaves_row_untouched() -> None:
    row = {"Mobile Number 1": "+252-612-345-678", "Phone 1": "+252-612-345-000"}
    snapshot = dict(row)

    first = field_value(row, "mobile_number_1")
    second = field_value(row, "mobile_number_1")

    assert first == second == "+252-612-345-678"
    assert row == snapshot


def test_blank_values_include_spreadsheet_placeholder() -> None:
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank("Not found")
    assert is_blank("NOT FOUND")
    assert not is_blank(0)
    assert not is_blank("0")


def test_has_column_counts_empty_cells_but_not_nulls() -> None:
    assert has_column({"business_name": ""}, ALIASES["business_name"])
    assert has_column({" Business Name ": ""}, ALIASES["business_name"])
    assert not has_column({"business_name": None}, ALIASES["business_name"])


def test_text_value_strips_and_stringifies() -> None:
    row = {"size": 120, "floor": "  2 ", "file_number": "Not found"}

    assert text_value(row, "size") == "120"
    assert text_value(row, "floor") == "2"
    assert text_value(row, "file_number") is None
